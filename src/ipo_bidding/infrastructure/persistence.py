# src/ipo_bidding/infrastructure/persistence.py
"""BidRepository — raw SQL persistence implementation of the bid record store."""

from collections.abc import Callable
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_bidding.domain.models import Bid, BidInput
from src.ipo_common.errors import (
    ApplicationNumberConflictError,
    DuplicateBidError,
    WriteError,
)
from src.ipo_common.id_generator import generate_id

# Unique constraint names, see alembic/versions/005_create_bids.py
UQ_IPO_CLIENT = "uq_bids_ipo_client"
UQ_APPLICATION_NUMBER = "uq_bids_application_number"

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, ipo_id, ipo_name, client_code, client_name, pan, upi_id,
    quantity, price, use_cutoff, amount, category, application_number,
    broker_code, group_code, exchange_code, exchange_status, dp_status,
    sponsor_bank_status, exchange_datetime, created_at, updated_at
"""

_INSERT_BID_SQL = text(f"""
    INSERT INTO bids (id, ipo_id, ipo_name, client_code, client_name, pan, upi_id,
        quantity, price, use_cutoff, amount, category, application_number,
        broker_code, group_code, exchange_code)
    VALUES (:id, :ipo_id, :ipo_name, :client_code, :client_name, :pan, :upi_id,
        :quantity, :price, :use_cutoff, :amount, :category, :application_number,
        :broker_code, :group_code, :exchange_code)
    RETURNING {_SELECT_COLUMNS}
""")

_LIST_BIDS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM bids
    WHERE (CAST(:ipo_id AS TEXT) IS NULL OR ipo_id = CAST(:ipo_id AS TEXT))
      AND (CAST(:broker_code AS TEXT) IS NULL OR broker_code = CAST(:broker_code AS TEXT))
    ORDER BY created_at DESC, id DESC
""")

_GET_BID_SQL = text(f"SELECT {_SELECT_COLUMNS} FROM bids WHERE id = :id")

_UPDATE_STATUS_SQL = text(f"""
    UPDATE bids
    SET exchange_status     = COALESCE(CAST(:exchange_status AS TEXT), exchange_status),
        sponsor_bank_status = COALESCE(CAST(:sponsor_bank_status AS TEXT), sponsor_bank_status),
        dp_status           = COALESCE(CAST(:dp_status AS TEXT), dp_status),
        exchange_datetime   = CASE WHEN CAST(:exchange_status AS TEXT) IS NULL
                                   THEN exchange_datetime ELSE NOW() END
    WHERE id = :id
    RETURNING {_SELECT_COLUMNS}
""")

_DELETE_BID_SQL = text("DELETE FROM bids WHERE id = :id RETURNING id")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_bid(row: Any) -> Bid:
    """Convert a DB result row to a Bid domain object."""
    return Bid(
        id=row.id,
        ipo_id=row.ipo_id,
        ipo_name=row.ipo_name,
        client_code=row.client_code,
        client_name=row.client_name,
        pan=row.pan,
        upi_id=row.upi_id,
        quantity=row.quantity,
        price=row.price,
        use_cutoff=row.use_cutoff,
        amount=row.amount,
        category=row.category,
        application_number=row.application_number,
        broker_code=row.broker_code,
        group_code=row.group_code,
        exchange_code=row.exchange_code,
        exchange_status=row.exchange_status,
        dp_status=row.dp_status,
        sponsor_bank_status=row.sponsor_bank_status,
        exchange_datetime=row.exchange_datetime,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _map_integrity_error(e: IntegrityError, bid_input: BidInput) -> WriteError:
    """Translate a unique-constraint violation by constraint name."""
    detail = str(e.orig)
    if UQ_IPO_CLIENT in detail:
        return DuplicateBidError(bid_input.ipo_id, bid_input.client_code)
    if UQ_APPLICATION_NUMBER in detail:
        return ApplicationNumberConflictError(bid_input.application_number)
    return WriteError(detail)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class BidRepository:
    """Concrete implementation of BidRepositoryProtocol using raw SQL.

    Never commits: the batch submitter commits after every successful create,
    single-bid endpoints commit in the router.
    """

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        self._new_id = id_factory or generate_id

    async def list_bids(
        self,
        db: AsyncSession,
        ipo_id: str | None = None,
        broker_code: str | None = None,
    ) -> list[Bid]:
        result = await db.execute(
            _LIST_BIDS_SQL, {"ipo_id": ipo_id, "broker_code": broker_code}
        )
        return [_row_to_bid(row) for row in result.fetchall()]

    async def get_bid(self, db: AsyncSession, bid_id: str) -> Bid | None:
        result = await db.execute(_GET_BID_SQL, {"id": bid_id})
        row = result.fetchone()
        return _row_to_bid(row) if row else None

    async def create_bid(self, db: AsyncSession, bid_input: BidInput) -> Bid:
        """Insert inside a SAVEPOINT so a rejected row leaves the session usable."""
        params = {
            "id": self._new_id(),
            "ipo_id": bid_input.ipo_id,
            "ipo_name": bid_input.ipo_name,
            "client_code": bid_input.client_code,
            "client_name": bid_input.client_name,
            "pan": bid_input.pan,
            "upi_id": bid_input.upi_id,
            "quantity": bid_input.quantity,
            "price": bid_input.price,
            "use_cutoff": bid_input.use_cutoff,
            "amount": bid_input.amount,
            "category": bid_input.category,
            "application_number": bid_input.application_number,
            "broker_code": bid_input.broker_code,
            "group_code": bid_input.group_code,
            "exchange_code": bid_input.exchange_code,
        }
        try:
            async with db.begin_nested():
                result = await db.execute(_INSERT_BID_SQL, params)
                row = result.fetchone()
        except IntegrityError as e:
            raise _map_integrity_error(e, bid_input) from e
        except SQLAlchemyError as e:
            raise WriteError(str(e)) from e
        return _row_to_bid(row)

    async def update_bid_status(
        self,
        db: AsyncSession,
        bid_id: str,
        exchange_status: str | None = None,
        sponsor_bank_status: str | None = None,
        dp_status: str | None = None,
    ) -> Bid | None:
        result = await db.execute(
            _UPDATE_STATUS_SQL,
            {
                "id": bid_id,
                "exchange_status": exchange_status,
                "sponsor_bank_status": sponsor_bank_status,
                "dp_status": dp_status,
            },
        )
        row = result.fetchone()
        return _row_to_bid(row) if row else None

    async def delete_bid(self, db: AsyncSession, bid_id: str) -> bool:
        result = await db.execute(_DELETE_BID_SQL, {"id": bid_id})
        return result.fetchone() is not None
