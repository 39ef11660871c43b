"""Auth API router: login, refresh, me.

All endpoints return ApiResponse. request_id is read from
request.state (injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ipo_brokers.domain.models import Broker
from src.ipo_common.database import get_db_session
from src.ipo_common.response import ApiResponse, success_response
from src.ipo_gateway.auth.dependencies import get_current_broker
from src.ipo_gateway.user.schemas import (
    BrokerInfo,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
)
from src.ipo_gateway.user.service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = AuthService()


def _get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


def _broker_info(broker: Broker) -> BrokerInfo:
    return BrokerInfo(
        broker_code=broker.broker_code,
        username=broker.username,
        role=broker.role,
        bid_permission=broker.is_admin or broker.bid_permission,
    )


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Broker login",
)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    broker, access_token, refresh_token = await _service.login(
        body.username, body.password, db
    )

    data = LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        broker=_broker_info(broker),
    )
    resp = success_response(data.model_dump())
    resp.request_id = _get_request_id(request)
    resp.message = "Login successful"
    return resp


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Refresh access token",
)
async def refresh_token(
    request: Request,
    body: RefreshRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    new_access_token = await _service.refresh(body.refresh_token, db)

    data = RefreshResponse(
        access_token=new_access_token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )
    resp = success_response(data.model_dump())
    resp.request_id = _get_request_id(request)
    resp.message = "Token refreshed"
    return resp


@router.get("/me", response_model=ApiResponse, summary="Current broker")
async def me(
    request: Request,
    current_broker: Annotated[Broker, Depends(get_current_broker)],
) -> ApiResponse:
    resp = success_response(_broker_info(current_broker).model_dump())
    resp.request_id = _get_request_id(request)
    return resp
