"""Broker account and UPI handler management (administrators only)."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.application.schemas import (
    BrokerCreateRequest,
    BrokerResponse,
    BrokerUpdateRequest,
    UpiHandlerCreateRequest,
    UpiHandlerResponse,
)
from src.ipo_brokers.domain.models import Broker, UpiHandler
from src.ipo_brokers.domain.repository import (
    BrokerRepositoryProtocol,
    UpiHandlerRepositoryProtocol,
)
from src.ipo_brokers.infrastructure.persistence import (
    BrokerRepository,
    UpiHandlerRepository,
)
from src.ipo_common.errors import (
    BrokerExistsError,
    BrokerInUseError,
    BrokerNotFoundError,
    UpiHandlerExistsError,
    UpiHandlerNotFoundError,
)
from src.ipo_common.id_generator import generate_id
from src.ipo_gateway.auth.password import hash_password

logger = logging.getLogger(__name__)


class BrokerApplicationService:
    def __init__(self, repo: BrokerRepositoryProtocol | None = None) -> None:
        self._repo: BrokerRepositoryProtocol = repo or BrokerRepository()

    async def list_brokers(self, db: AsyncSession) -> list[BrokerResponse]:
        return [BrokerResponse.from_domain(b) for b in await self._repo.list_brokers(db)]

    async def create_broker(
        self, db: AsyncSession, req: BrokerCreateRequest
    ) -> BrokerResponse:
        if await self._repo.exists_code_or_username(db, req.broker_code, req.username):
            raise BrokerExistsError()
        broker = Broker(
            id=generate_id(),
            password_hash=hash_password(req.password),
            **req.model_dump(exclude={"password"}),
        )
        try:
            created = await self._repo.create(db, broker)
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise BrokerExistsError() from e
        except Exception:
            await db.rollback()
            raise
        logger.info("Broker created: code=%s role=%s", created.broker_code, created.role)
        return BrokerResponse.from_domain(created)

    async def update_broker(
        self, db: AsyncSession, broker_id: str, req: BrokerUpdateRequest
    ) -> BrokerResponse:
        fields = req.model_dump(exclude_unset=True, exclude_none=True)
        password = fields.pop("password", None)
        if password is not None:
            fields["password_hash"] = hash_password(password)
        try:
            updated = await self._repo.update(db, broker_id, fields)
            if updated is None:
                raise BrokerNotFoundError(broker_id)
            await db.commit()
        except IntegrityError as e:
            # username collides with another broker
            await db.rollback()
            raise BrokerExistsError() from e
        except Exception:
            await db.rollback()
            raise
        logger.info("Broker updated: code=%s fields=%s", updated.broker_code, sorted(fields))
        return BrokerResponse.from_domain(updated)

    async def delete_broker(self, db: AsyncSession, broker_id: str) -> None:
        try:
            if not await self._repo.delete(db, broker_id):
                raise BrokerNotFoundError(broker_id)
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise BrokerInUseError(broker_id) from e
        except Exception:
            await db.rollback()
            raise
        logger.info("Broker deleted: id=%s", broker_id)


class UpiHandlerApplicationService:
    def __init__(self, repo: UpiHandlerRepositoryProtocol | None = None) -> None:
        self._repo: UpiHandlerRepositoryProtocol = repo or UpiHandlerRepository()

    async def list_handlers(self, db: AsyncSession) -> list[UpiHandlerResponse]:
        return [UpiHandlerResponse.from_domain(h) for h in await self._repo.list_handlers(db)]

    async def create_handler(
        self, db: AsyncSession, req: UpiHandlerCreateRequest
    ) -> UpiHandlerResponse:
        name = req.name.strip()
        if await self._repo.get_by_name(db, name):
            raise UpiHandlerExistsError(name)
        try:
            created = await self._repo.create(db, UpiHandler(id=generate_id(), name=name))
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise UpiHandlerExistsError(name) from e
        except Exception:
            await db.rollback()
            raise
        logger.info("UPI handler created: %s", name)
        return UpiHandlerResponse.from_domain(created)

    async def delete_handler(self, db: AsyncSession, handler_id: str) -> None:
        try:
            if not await self._repo.delete(db, handler_id):
                raise UpiHandlerNotFoundError(handler_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
