"""ipo_bidding REST endpoints.

GET    /bids                        — list (sub-brokers: own bids only)
POST   /bids/validate               — check bid terms, no write
GET    /bids/eligible-clients       — clients without a bid on the IPO
POST   /bids/batch                  — one bid per selected client, per-client report
GET    /bids/{bid_id}               — detail
PATCH  /bids/{bid_id}/status        — exchange / sponsor bank / DP status (admin)
DELETE /bids/{bid_id}               — rebid: remove so the client is eligible again
GET    /bids/{bid_id}/asba-form     — printable ASBA form data
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_bidding.application.schemas import (
    BatchBidRequest,
    BidStatusUpdateRequest,
    BidValidateRequest,
)
from src.ipo_bidding.application.service import BidApplicationService
from src.ipo_brokers.domain.models import Broker
from src.ipo_common.database import get_db_session
from src.ipo_common.response import ApiResponse, success_response
from src.ipo_gateway.auth.dependencies import (
    broker_filter,
    get_current_broker,
    require_admin,
    require_bid_permission,
    resolve_broker_code,
)

router = APIRouter(prefix="/bids", tags=["bids"])

_service = BidApplicationService()


def _respond(request: Request, data: Any, message: str = "success") -> ApiResponse:
    resp = success_response(data)
    resp.message = message
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


def _scope(broker: Broker) -> str | None:
    """None lets administrators reach every broker's bids."""
    return None if broker.is_admin else broker.broker_code


@router.get("")
async def list_bids(
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    ipo_id: str | None = Query(None),
    broker_code: str | None = Query(None, description="Administrators only"),
) -> ApiResponse:
    result = await _service.list_bids(db, ipo_id, broker_filter(current_broker, broker_code))
    return _respond(request, result.model_dump(mode="json"))


@router.post("/validate")
async def validate_bid(
    request: Request,
    body: BidValidateRequest,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.validate(db, body)
    return _respond(request, result.model_dump())


@router.get("/eligible-clients")
async def eligible_clients(
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    ipo_id: str = Query(...),
    broker_code: str | None = Query(None, description="Administrators only"),
) -> ApiResponse:
    code = resolve_broker_code(current_broker, broker_code)
    result = await _service.eligible_clients(db, ipo_id, code)
    return _respond(request, [c.model_dump() for c in result])


@router.post("/batch")
async def submit_batch(
    request: Request,
    body: BatchBidRequest,
    current_broker: Annotated[Broker, Depends(require_bid_permission)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    code = resolve_broker_code(current_broker, body.broker_code)
    report = await _service.submit(db, body, code)
    return _respond(request, report.model_dump(mode="json"), message=report.status)


@router.get("/{bid_id}")
async def get_bid(
    bid_id: str,
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_bid(db, bid_id, _scope(current_broker))
    return _respond(request, result.model_dump(mode="json"))


@router.patch("/{bid_id}/status")
async def update_bid_status(
    bid_id: str,
    request: Request,
    body: BidStatusUpdateRequest,
    current_broker: Annotated[Broker, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_status(db, bid_id, body)
    return _respond(request, result.model_dump(mode="json"))


@router.delete("/{bid_id}")
async def rebid(
    bid_id: str,
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.rebid(db, bid_id, _scope(current_broker))
    return _respond(request, {"id": bid_id}, message="Bid deleted, client can bid again")


@router.get("/{bid_id}/asba-form")
async def asba_form(
    bid_id: str,
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.asba_form(db, bid_id, _scope(current_broker))
    return _respond(request, result.model_dump())
