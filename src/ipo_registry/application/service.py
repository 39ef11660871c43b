"""ClientApplicationService — client registry CRUD, scoped per broker.

``broker_code`` None means the caller is an administrator and sees every
broker's clients; another broker's client is reported as not found.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_common.errors import ClientExistsError, ClientNotFoundError
from src.ipo_common.id_generator import generate_id
from src.ipo_registry.application.schemas import (
    ClientCreateRequest,
    ClientResponse,
    ClientUpdateRequest,
)
from src.ipo_registry.domain.models import Client
from src.ipo_registry.domain.repository import ClientRepositoryProtocol
from src.ipo_registry.infrastructure.persistence import ClientRepository

logger = logging.getLogger(__name__)


class ClientApplicationService:
    def __init__(self, repo: ClientRepositoryProtocol | None = None) -> None:
        self._repo: ClientRepositoryProtocol = repo or ClientRepository()

    async def _get_scoped(
        self, db: AsyncSession, client_id: str, broker_code: str | None
    ) -> Client:
        client = await self._repo.get_by_id(db, client_id)
        if client is None or (broker_code is not None and client.broker_code != broker_code):
            raise ClientNotFoundError(client_id)
        return client

    async def list_clients(
        self, db: AsyncSession, broker_code: str | None, trading_code: str | None
    ) -> list[ClientResponse]:
        clients = await self._repo.list_clients(db, broker_code, trading_code)
        return [ClientResponse.from_domain(c) for c in clients]

    async def get_client(
        self, db: AsyncSession, client_id: str, broker_code: str | None
    ) -> ClientResponse:
        return ClientResponse.from_domain(await self._get_scoped(db, client_id, broker_code))

    async def create_client(
        self, db: AsyncSession, req: ClientCreateRequest, broker_code: str
    ) -> ClientResponse:
        if await self._repo.get_by_trading_code(db, broker_code, req.trading_code):
            raise ClientExistsError(req.trading_code)
        client = Client(
            id=generate_id(),
            broker_code=broker_code,
            **req.model_dump(exclude={"broker_code"}),
        )
        try:
            created = await self._repo.create(db, client)
            await db.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent create of the same code
            await db.rollback()
            raise ClientExistsError(req.trading_code) from e
        except Exception:
            await db.rollback()
            raise
        logger.info("Client created: id=%s code=%s broker=%s", created.id, created.trading_code, broker_code)
        return ClientResponse.from_domain(created)

    async def update_client(
        self,
        db: AsyncSession,
        client_id: str,
        req: ClientUpdateRequest,
        broker_code: str | None,
    ) -> ClientResponse:
        await self._get_scoped(db, client_id, broker_code)
        try:
            updated = await self._repo.update(db, client_id, req.model_dump(exclude_unset=True))
            if updated is None:
                raise ClientNotFoundError(client_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ClientResponse.from_domain(updated)

    async def delete_client(
        self, db: AsyncSession, client_id: str, broker_code: str | None
    ) -> None:
        await self._get_scoped(db, client_id, broker_code)
        try:
            if not await self._repo.delete(db, client_id):
                raise ClientNotFoundError(client_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Client deleted: id=%s", client_id)
