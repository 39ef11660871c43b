"""ipo_registry REST endpoints.

GET    /clients               — list (own clients; admins may pass broker_code)
GET    /clients/{client_id}   — detail
POST   /clients               — create
PATCH  /clients/{client_id}   — partial update
DELETE /clients/{client_id}   — delete
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.domain.models import Broker
from src.ipo_common.database import get_db_session
from src.ipo_common.response import ApiResponse, success_response
from src.ipo_gateway.auth.dependencies import (
    broker_filter,
    get_current_broker,
    resolve_broker_code,
)
from src.ipo_registry.application.schemas import ClientCreateRequest, ClientUpdateRequest
from src.ipo_registry.application.service import ClientApplicationService

router = APIRouter(prefix="/clients", tags=["clients"])

_service = ClientApplicationService()


def _scope(broker: Broker) -> str | None:
    return None if broker.is_admin else broker.broker_code


@router.get("")
async def list_clients(
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    broker_code: str | None = Query(None, description="Administrators only"),
    trading_code: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_clients(
        db, broker_filter(current_broker, broker_code), trading_code
    )
    resp = success_response([c.model_dump() for c in result])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{client_id}")
async def get_client(
    client_id: str,
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_client(db, client_id, _scope(current_broker))
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("", status_code=201)
async def create_client(
    request: Request,
    body: ClientCreateRequest,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    code = resolve_broker_code(current_broker, body.broker_code)
    result = await _service.create_client(db, body, code)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{client_id}")
async def update_client(
    client_id: str,
    request: Request,
    body: ClientUpdateRequest,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_client(db, client_id, body, _scope(current_broker))
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete_client(db, client_id, _scope(current_broker))
    resp = success_response({"id": client_id})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
