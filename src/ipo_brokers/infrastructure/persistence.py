"""BrokerRepository / UpiHandlerRepository — raw SQL persistence."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.domain.models import Broker, UpiHandler

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_BROKER_COLUMNS = """
    id, broker_code, username, password_hash, mobile, email, pan,
    bid_permission, login_access, bill_permission, role,
    created_at, updated_at
"""

_LIST_BROKERS_SQL = text(f"SELECT {_BROKER_COLUMNS} FROM brokers ORDER BY broker_code")

_GET_BROKER_BY_ID_SQL = text(f"SELECT {_BROKER_COLUMNS} FROM brokers WHERE id = :id")

_GET_BROKER_BY_CODE_SQL = text(
    f"SELECT {_BROKER_COLUMNS} FROM brokers WHERE broker_code = :broker_code"
)

_GET_BROKER_BY_USERNAME_SQL = text(
    f"SELECT {_BROKER_COLUMNS} FROM brokers WHERE username = :username"
)

_EXISTS_BROKER_SQL = text("""
    SELECT 1 FROM brokers
    WHERE broker_code = :broker_code OR username = :username
    LIMIT 1
""")

_INSERT_BROKER_SQL = text(f"""
    INSERT INTO brokers (id, broker_code, username, password_hash, mobile, email, pan,
        bid_permission, login_access, bill_permission, role)
    VALUES (:id, :broker_code, :username, :password_hash, :mobile, :email, :pan,
        :bid_permission, :login_access, :bill_permission, :role)
    RETURNING {_BROKER_COLUMNS}
""")

_DELETE_BROKER_SQL = text("DELETE FROM brokers WHERE id = :id RETURNING id")

_BROKER_UPDATABLE = (
    "username", "password_hash", "mobile", "email", "pan",
    "bid_permission", "login_access", "bill_permission", "role",
)

_LIST_HANDLERS_SQL = text("SELECT id, name, created_at FROM upi_handlers ORDER BY name")

_GET_HANDLER_BY_NAME_SQL = text(
    "SELECT id, name, created_at FROM upi_handlers WHERE name = :name"
)

_INSERT_HANDLER_SQL = text("""
    INSERT INTO upi_handlers (id, name)
    VALUES (:id, :name)
    RETURNING id, name, created_at
""")

_DELETE_HANDLER_SQL = text("DELETE FROM upi_handlers WHERE id = :id RETURNING id")


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_broker(row: Any) -> Broker:
    return Broker(
        id=row.id,
        broker_code=row.broker_code,
        username=row.username,
        password_hash=row.password_hash,
        mobile=row.mobile,
        email=row.email,
        pan=row.pan,
        bid_permission=row.bid_permission,
        login_access=row.login_access,
        bill_permission=row.bill_permission,
        role=row.role,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_handler(row: Any) -> UpiHandler:
    return UpiHandler(id=row.id, name=row.name, created_at=row.created_at)


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class BrokerRepository:
    """Concrete implementation of BrokerRepositoryProtocol using raw SQL."""

    async def list_brokers(self, db: AsyncSession) -> list[Broker]:
        result = await db.execute(_LIST_BROKERS_SQL)
        return [_row_to_broker(row) for row in result.fetchall()]

    async def get_by_id(self, db: AsyncSession, broker_id: str) -> Broker | None:
        result = await db.execute(_GET_BROKER_BY_ID_SQL, {"id": broker_id})
        row = result.fetchone()
        return _row_to_broker(row) if row else None

    async def get_by_code(self, db: AsyncSession, broker_code: str) -> Broker | None:
        result = await db.execute(_GET_BROKER_BY_CODE_SQL, {"broker_code": broker_code})
        row = result.fetchone()
        return _row_to_broker(row) if row else None

    async def get_by_username(self, db: AsyncSession, username: str) -> Broker | None:
        result = await db.execute(_GET_BROKER_BY_USERNAME_SQL, {"username": username})
        row = result.fetchone()
        return _row_to_broker(row) if row else None

    async def exists_code_or_username(
        self, db: AsyncSession, broker_code: str, username: str
    ) -> bool:
        result = await db.execute(
            _EXISTS_BROKER_SQL, {"broker_code": broker_code, "username": username}
        )
        return result.fetchone() is not None

    async def create(self, db: AsyncSession, broker: Broker) -> Broker:
        result = await db.execute(
            _INSERT_BROKER_SQL,
            {
                "id": broker.id,
                "broker_code": broker.broker_code,
                "username": broker.username,
                "password_hash": broker.password_hash,
                "mobile": broker.mobile,
                "email": broker.email,
                "pan": broker.pan,
                "bid_permission": broker.bid_permission,
                "login_access": broker.login_access,
                "bill_permission": broker.bill_permission,
                "role": broker.role,
            },
        )
        return _row_to_broker(result.fetchone())

    async def update(
        self, db: AsyncSession, broker_id: str, fields: dict[str, Any]
    ) -> Broker | None:
        params = {k: v for k, v in fields.items() if k in _BROKER_UPDATABLE}
        if not params:
            return await self.get_by_id(db, broker_id)
        assignments = ", ".join(f"{col} = :{col}" for col in params)
        sql = text(
            f"UPDATE brokers SET {assignments} WHERE id = :id RETURNING {_BROKER_COLUMNS}"  # noqa: S608
        )
        result = await db.execute(sql, {**params, "id": broker_id})
        row = result.fetchone()
        return _row_to_broker(row) if row else None

    async def delete(self, db: AsyncSession, broker_id: str) -> bool:
        result = await db.execute(_DELETE_BROKER_SQL, {"id": broker_id})
        return result.fetchone() is not None


class UpiHandlerRepository:
    """Concrete implementation of UpiHandlerRepositoryProtocol using raw SQL."""

    async def list_handlers(self, db: AsyncSession) -> list[UpiHandler]:
        result = await db.execute(_LIST_HANDLERS_SQL)
        return [_row_to_handler(row) for row in result.fetchall()]

    async def get_by_name(self, db: AsyncSession, name: str) -> UpiHandler | None:
        result = await db.execute(_GET_HANDLER_BY_NAME_SQL, {"name": name})
        row = result.fetchone()
        return _row_to_handler(row) if row else None

    async def create(self, db: AsyncSession, handler: UpiHandler) -> UpiHandler:
        result = await db.execute(
            _INSERT_HANDLER_SQL, {"id": handler.id, "name": handler.name}
        )
        return _row_to_handler(result.fetchone())

    async def delete(self, db: AsyncSession, handler_id: str) -> bool:
        result = await db.execute(_DELETE_HANDLER_SQL, {"id": handler_id})
        return result.fetchone() is not None
