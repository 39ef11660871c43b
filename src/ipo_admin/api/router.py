# src/ipo_admin/api/router.py
"""Dashboard REST API."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_admin.application.service import DashboardService
from src.ipo_brokers.domain.models import Broker
from src.ipo_common.database import get_db_session
from src.ipo_common.response import ApiResponse, success_response
from src.ipo_gateway.auth.dependencies import (
    get_current_broker,
    require_admin,
    resolve_broker_code,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
_service = DashboardService()


@router.get("/admin")
async def admin_dashboard(
    admin: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.admin_summary(db))


@router.get("/broker")
async def broker_dashboard(
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    broker_code: str | None = Query(None, description="Administrators only"),
) -> ApiResponse:
    code = resolve_broker_code(current_broker, broker_code)
    return success_response(await _service.broker_summary(code, db))
