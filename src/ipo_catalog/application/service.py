"""IpoApplicationService — thin composition layer over IpoRepository.

Writes commit here and roll back on any failure.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_catalog.application.schemas import (
    IpoCreateRequest,
    IpoResponse,
    IpoUpdateRequest,
)
from src.ipo_catalog.domain.models import Ipo
from src.ipo_catalog.domain.repository import IpoRepositoryProtocol
from src.ipo_catalog.infrastructure.persistence import IpoRepository
from src.ipo_common.errors import AppError, IpoNotFoundError
from src.ipo_common.id_generator import generate_id

logger = logging.getLogger(__name__)


class IpoApplicationService:
    def __init__(self, repo: IpoRepositoryProtocol | None = None) -> None:
        self._repo: IpoRepositoryProtocol = repo or IpoRepository()

    async def list_ipos(
        self,
        db: AsyncSession,
        category: str | None,
        status: str | None,
    ) -> list[IpoResponse]:
        ipos = await self._repo.list_ipos(db, category, status)
        return [IpoResponse.from_domain(i) for i in ipos]

    async def get_ipo(self, db: AsyncSession, ipo_id: str) -> IpoResponse:
        ipo = await self._repo.get_ipo_by_id(db, ipo_id)
        if ipo is None:
            raise IpoNotFoundError(ipo_id)
        return IpoResponse.from_domain(ipo)

    async def create_ipo(self, db: AsyncSession, req: IpoCreateRequest) -> IpoResponse:
        ipo = Ipo(id=generate_id(), **req.model_dump())
        try:
            created = await self._repo.create_ipo(db, ipo)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("IPO created: id=%s name=%s", created.id, created.name)
        return IpoResponse.from_domain(created)

    async def update_ipo(
        self, db: AsyncSession, ipo_id: str, req: IpoUpdateRequest
    ) -> IpoResponse:
        fields = req.model_dump(exclude_unset=True, exclude_none=True)
        current = await self._repo.get_ipo_by_id(db, ipo_id)
        if current is None:
            raise IpoNotFoundError(ipo_id)
        band_min = fields.get("price_band_min", current.price_band_min)
        band_max = fields.get("price_band_max", current.price_band_max)
        if band_min > band_max:
            raise AppError(3003, "price_band_min must not exceed price_band_max", 422)
        try:
            updated = await self._repo.update_ipo(db, ipo_id, fields)
            if updated is None:
                raise IpoNotFoundError(ipo_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return IpoResponse.from_domain(updated)

    async def delete_ipo(self, db: AsyncSession, ipo_id: str) -> None:
        try:
            if not await self._repo.delete_ipo(db, ipo_id):
                raise IpoNotFoundError(ipo_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("IPO deleted: id=%s", ipo_id)
