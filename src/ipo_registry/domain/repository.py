# src/ipo_registry/domain/repository.py
"""ClientRepository Protocol — interface contract for persistence layer."""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_registry.domain.models import Client


class ClientRepositoryProtocol(Protocol):
    async def list_clients(
        self,
        db: AsyncSession,
        broker_code: str | None,
        trading_code: str | None,
    ) -> list[Client]: ...

    async def get_by_id(self, db: AsyncSession, client_id: str) -> Client | None: ...

    async def get_by_trading_code(
        self, db: AsyncSession, broker_code: str, trading_code: str
    ) -> Client | None: ...

    async def create(self, db: AsyncSession, client: Client) -> Client: ...

    async def update(
        self, db: AsyncSession, client_id: str, fields: dict[str, Any]
    ) -> Client | None: ...

    async def delete(self, db: AsyncSession, client_id: str) -> bool: ...
