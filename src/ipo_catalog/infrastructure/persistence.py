"""IpoRepository — concrete implementation of IpoRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_catalog.domain.models import Ipo

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, name, category, status,
    price_band_min, price_band_max,
    lot_size, retail_max_lot, hni_max_amount,
    open_date, close_date,
    created_at, updated_at
"""

_GET_IPO_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM ipos
    WHERE id = :ipo_id
""")

_LIST_IPOS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM ipos
    WHERE
        (CAST(:category AS TEXT) IS NULL OR category = CAST(:category AS TEXT))
        AND (CAST(:status AS TEXT) IS NULL OR status = CAST(:status AS TEXT))
    ORDER BY created_at DESC, id DESC
""")

_INSERT_IPO_SQL = text(f"""
    INSERT INTO ipos (id, name, category, status,
        price_band_min, price_band_max,
        lot_size, retail_max_lot, hni_max_amount,
        open_date, close_date)
    VALUES (:id, :name, :category, :status,
        :price_band_min, :price_band_max,
        :lot_size, :retail_max_lot, :hni_max_amount,
        :open_date, :close_date)
    RETURNING {_COLUMNS}
""")

_DELETE_IPO_SQL = text("DELETE FROM ipos WHERE id = :ipo_id RETURNING id")

# Columns an update may touch; anything else is ignored.
_UPDATABLE = (
    "name", "category", "status",
    "price_band_min", "price_band_max",
    "lot_size", "retail_max_lot", "hni_max_amount",
    "open_date", "close_date",
)

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_ipo(row: Any) -> Ipo:
    return Ipo(
        id=row.id,
        name=row.name,
        category=row.category,
        status=row.status,
        price_band_min=row.price_band_min,
        price_band_max=row.price_band_max,
        lot_size=row.lot_size,
        retail_max_lot=row.retail_max_lot,
        hni_max_amount=row.hni_max_amount,
        open_date=row.open_date,
        close_date=row.close_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class IpoRepository:
    """Concrete repository for the ipos table."""

    async def get_ipo_by_id(self, db: AsyncSession, ipo_id: str) -> Ipo | None:
        result = await db.execute(_GET_IPO_SQL, {"ipo_id": ipo_id})
        row = result.fetchone()
        return _row_to_ipo(row) if row else None

    async def list_ipos(
        self,
        db: AsyncSession,
        category: str | None,
        status: str | None,
    ) -> list[Ipo]:
        result = await db.execute(
            _LIST_IPOS_SQL, {"category": category, "status": status}
        )
        return [_row_to_ipo(row) for row in result.fetchall()]

    async def create_ipo(self, db: AsyncSession, ipo: Ipo) -> Ipo:
        result = await db.execute(
            _INSERT_IPO_SQL,
            {
                "id": ipo.id,
                "name": ipo.name,
                "category": ipo.category,
                "status": ipo.status,
                "price_band_min": ipo.price_band_min,
                "price_band_max": ipo.price_band_max,
                "lot_size": ipo.lot_size,
                "retail_max_lot": ipo.retail_max_lot,
                "hni_max_amount": ipo.hni_max_amount,
                "open_date": ipo.open_date,
                "close_date": ipo.close_date,
            },
        )
        return _row_to_ipo(result.fetchone())

    async def update_ipo(
        self, db: AsyncSession, ipo_id: str, fields: dict[str, Any]
    ) -> Ipo | None:
        params = {k: v for k, v in fields.items() if k in _UPDATABLE}
        if not params:
            return await self.get_ipo_by_id(db, ipo_id)
        # Column names come from the _UPDATABLE whitelist, values stay bound
        assignments = ", ".join(f"{col} = :{col}" for col in params)
        sql = text(
            f"UPDATE ipos SET {assignments} WHERE id = :ipo_id RETURNING {_COLUMNS}"  # noqa: S608
        )
        result = await db.execute(sql, {**params, "ipo_id": ipo_id})
        row = result.fetchone()
        return _row_to_ipo(row) if row else None

    async def delete_ipo(self, db: AsyncSession, ipo_id: str) -> bool:
        result = await db.execute(_DELETE_IPO_SQL, {"ipo_id": ipo_id})
        return result.fetchone() is not None
