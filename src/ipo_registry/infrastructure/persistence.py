"""ClientRepository — raw SQL persistence implementation."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_registry.domain.models import Client

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, trading_code, client_name, pan, dp_id, upi_handle, broker_code,
    mobile, email, group_code, bank_name, branch, asba_account, created_at, updated_at
"""

_LIST_CLIENTS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM clients
    WHERE (CAST(:broker_code AS TEXT) IS NULL OR broker_code = CAST(:broker_code AS TEXT))
      AND (CAST(:trading_code AS TEXT) IS NULL OR trading_code = CAST(:trading_code AS TEXT))
    ORDER BY created_at, id
""")

_GET_CLIENT_BY_ID_SQL = text(f"SELECT {_SELECT_COLUMNS} FROM clients WHERE id = :id")

_GET_CLIENT_BY_CODE_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM clients
    WHERE broker_code = :broker_code AND trading_code = :trading_code
""")

_INSERT_CLIENT_SQL = text(f"""
    INSERT INTO clients (id, trading_code, client_name, pan, dp_id, upi_handle,
        broker_code, mobile, email, group_code, bank_name, branch, asba_account)
    VALUES (:id, :trading_code, :client_name, :pan, :dp_id, :upi_handle,
        :broker_code, :mobile, :email, :group_code, :bank_name, :branch, :asba_account)
    RETURNING {_SELECT_COLUMNS}
""")

_DELETE_CLIENT_SQL = text("DELETE FROM clients WHERE id = :id RETURNING id")

_UPDATABLE = (
    "client_name", "pan", "dp_id", "upi_handle",
    "mobile", "email", "group_code", "bank_name", "branch", "asba_account",
)


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_client(row: Any) -> Client:
    """Convert a DB result row to a Client domain object."""
    return Client(
        id=row.id,
        trading_code=row.trading_code,
        client_name=row.client_name,
        pan=row.pan,
        dp_id=row.dp_id,
        upi_handle=row.upi_handle,
        broker_code=row.broker_code,
        mobile=row.mobile,
        email=row.email,
        group_code=row.group_code,
        bank_name=row.bank_name,
        branch=row.branch,
        asba_account=row.asba_account,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ClientRepository:
    """Concrete implementation of ClientRepositoryProtocol using raw SQL."""

    async def list_clients(
        self,
        db: AsyncSession,
        broker_code: str | None,
        trading_code: str | None,
    ) -> list[Client]:
        result = await db.execute(
            _LIST_CLIENTS_SQL,
            {"broker_code": broker_code, "trading_code": trading_code},
        )
        return [_row_to_client(row) for row in result.fetchall()]

    async def get_by_id(self, db: AsyncSession, client_id: str) -> Client | None:
        result = await db.execute(_GET_CLIENT_BY_ID_SQL, {"id": client_id})
        row = result.fetchone()
        return _row_to_client(row) if row else None

    async def get_by_trading_code(
        self, db: AsyncSession, broker_code: str, trading_code: str
    ) -> Client | None:
        result = await db.execute(
            _GET_CLIENT_BY_CODE_SQL,
            {"broker_code": broker_code, "trading_code": trading_code},
        )
        row = result.fetchone()
        return _row_to_client(row) if row else None

    async def create(self, db: AsyncSession, client: Client) -> Client:
        result = await db.execute(
            _INSERT_CLIENT_SQL,
            {
                "id": client.id,
                "trading_code": client.trading_code,
                "client_name": client.client_name,
                "pan": client.pan,
                "dp_id": client.dp_id,
                "upi_handle": client.upi_handle,
                "broker_code": client.broker_code,
                "mobile": client.mobile,
                "email": client.email,
                "group_code": client.group_code,
                "bank_name": client.bank_name,
                "branch": client.branch,
                "asba_account": client.asba_account,
            },
        )
        return _row_to_client(result.fetchone())

    async def update(
        self, db: AsyncSession, client_id: str, fields: dict[str, Any]
    ) -> Client | None:
        params = {k: v for k, v in fields.items() if k in _UPDATABLE}
        if not params:
            return await self.get_by_id(db, client_id)
        assignments = ", ".join(f"{col} = :{col}" for col in params)
        sql = text(
            f"UPDATE clients SET {assignments} WHERE id = :id RETURNING {_SELECT_COLUMNS}"  # noqa: S608
        )
        result = await db.execute(sql, {**params, "id": client_id})
        row = result.fetchone()
        return _row_to_client(row) if row else None

    async def delete(self, db: AsyncSession, client_id: str) -> bool:
        result = await db.execute(_DELETE_CLIENT_SQL, {"id": client_id})
        return result.fetchone() is not None
