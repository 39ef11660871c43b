"""ipo_catalog REST endpoints.

GET    /ipos            — list, filter by category / status
GET    /ipos/{ipo_id}   — detail
POST   /ipos            — create (admin)
PATCH  /ipos/{ipo_id}   — partial update (admin)
DELETE /ipos/{ipo_id}   — delete (admin)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.domain.models import Broker
from src.ipo_catalog.application.schemas import (
    IpoCategoryLiteral,
    IpoCreateRequest,
    IpoStatusLiteral,
    IpoUpdateRequest,
)
from src.ipo_catalog.application.service import IpoApplicationService
from src.ipo_common.database import get_db_session
from src.ipo_common.response import ApiResponse, success_response
from src.ipo_gateway.auth.dependencies import get_current_broker, require_admin

router = APIRouter(prefix="/ipos", tags=["ipos"])

_service = IpoApplicationService()


@router.get("")
async def list_ipos(
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    category: IpoCategoryLiteral | None = Query(None),
    status: IpoStatusLiteral | None = Query(None),
) -> ApiResponse:
    result = await _service.list_ipos(db, category, status)
    resp = success_response([i.model_dump() for i in result])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{ipo_id}")
async def get_ipo(
    ipo_id: str,
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_ipo(db, ipo_id)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("", status_code=201)
async def create_ipo(
    request: Request,
    body: IpoCreateRequest,
    current_broker: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_ipo(db, body)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{ipo_id}")
async def update_ipo(
    ipo_id: str,
    request: Request,
    body: IpoUpdateRequest,
    current_broker: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_ipo(db, ipo_id, body)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{ipo_id}")
async def delete_ipo(
    ipo_id: str,
    request: Request,
    current_broker: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete_ipo(db, ipo_id)
    resp = success_response({"id": ipo_id})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
