# src/ipo_catalog/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_catalog.domain.models import Ipo


class IpoRepositoryProtocol(Protocol):
    async def list_ipos(
        self,
        db: AsyncSession,
        category: str | None,
        status: str | None,
    ) -> list[Ipo]: ...

    async def get_ipo_by_id(self, db: AsyncSession, ipo_id: str) -> Ipo | None: ...

    async def create_ipo(self, db: AsyncSession, ipo: Ipo) -> Ipo: ...

    async def update_ipo(
        self, db: AsyncSession, ipo_id: str, fields: dict[str, Any]
    ) -> Ipo | None: ...

    async def delete_ipo(self, db: AsyncSession, ipo_id: str) -> bool: ...
