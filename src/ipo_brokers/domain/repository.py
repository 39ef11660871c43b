# src/ipo_brokers/domain/repository.py
"""Broker / UPI handler repository Protocols."""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.domain.models import Broker, UpiHandler


class BrokerRepositoryProtocol(Protocol):
    async def list_brokers(self, db: AsyncSession) -> list[Broker]: ...

    async def get_by_id(self, db: AsyncSession, broker_id: str) -> Broker | None: ...

    async def get_by_code(self, db: AsyncSession, broker_code: str) -> Broker | None: ...

    async def get_by_username(self, db: AsyncSession, username: str) -> Broker | None: ...

    async def exists_code_or_username(
        self, db: AsyncSession, broker_code: str, username: str
    ) -> bool: ...

    async def create(self, db: AsyncSession, broker: Broker) -> Broker: ...

    async def update(
        self, db: AsyncSession, broker_id: str, fields: dict[str, Any]
    ) -> Broker | None: ...

    async def delete(self, db: AsyncSession, broker_id: str) -> bool: ...


class UpiHandlerRepositoryProtocol(Protocol):
    async def list_handlers(self, db: AsyncSession) -> list[UpiHandler]: ...

    async def get_by_name(self, db: AsyncSession, name: str) -> UpiHandler | None: ...

    async def create(self, db: AsyncSession, handler: UpiHandler) -> UpiHandler: ...

    async def delete(self, db: AsyncSession, handler_id: str) -> bool: ...
