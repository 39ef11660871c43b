"""Broker and UPI handler management endpoints.

GET    /brokers                    — list (admin)
POST   /brokers                    — create (admin)
PATCH  /brokers/{broker_id}        — permissions / contact / password reset (admin)
DELETE /brokers/{broker_id}        — delete (admin)
GET    /upi-handlers               — list (any broker, feeds the client form)
POST   /upi-handlers               — create (admin)
DELETE /upi-handlers/{handler_id}  — delete (admin)
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.application.schemas import (
    BrokerCreateRequest,
    BrokerUpdateRequest,
    UpiHandlerCreateRequest,
)
from src.ipo_brokers.application.service import (
    BrokerApplicationService,
    UpiHandlerApplicationService,
)
from src.ipo_brokers.domain.models import Broker
from src.ipo_common.database import get_db_session
from src.ipo_common.response import ApiResponse, success_response
from src.ipo_gateway.auth.dependencies import get_current_broker, require_admin

broker_router = APIRouter(prefix="/brokers", tags=["brokers"])
upi_handler_router = APIRouter(prefix="/upi-handlers", tags=["upi-handlers"])

_brokers = BrokerApplicationService()
_handlers = UpiHandlerApplicationService()


def _respond(request: Request, data: Any) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@broker_router.get("")
async def list_brokers(
    request: Request,
    admin: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _brokers.list_brokers(db)
    return _respond(request, [b.model_dump(mode="json") for b in result])


@broker_router.post("", status_code=201)
async def create_broker(
    request: Request,
    body: BrokerCreateRequest,
    admin: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _brokers.create_broker(db, body)
    return _respond(request, result.model_dump(mode="json"))


@broker_router.patch("/{broker_id}")
async def update_broker(
    broker_id: str,
    request: Request,
    body: BrokerUpdateRequest,
    admin: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _brokers.update_broker(db, broker_id, body)
    return _respond(request, result.model_dump(mode="json"))


@broker_router.delete("/{broker_id}")
async def delete_broker(
    broker_id: str,
    request: Request,
    admin: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _brokers.delete_broker(db, broker_id)
    return _respond(request, {"id": broker_id})


@upi_handler_router.get("")
async def list_upi_handlers(
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _handlers.list_handlers(db)
    return _respond(request, [h.model_dump(mode="json") for h in result])


@upi_handler_router.post("", status_code=201)
async def create_upi_handler(
    request: Request,
    body: UpiHandlerCreateRequest,
    admin: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _handlers.create_handler(db, body)
    return _respond(request, result.model_dump(mode="json"))


@upi_handler_router.delete("/{handler_id}")
async def delete_upi_handler(
    handler_id: str,
    request: Request,
    admin: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _handlers.delete_handler(db, handler_id)
    return _respond(request, {"id": handler_id})
