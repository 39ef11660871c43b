"""Pydantic request/response schemas for ipo_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class RefreshRequest(BaseModel):
    refresh_token: str


class BrokerInfo(BaseModel):
    """Minimal broker identity embedded in the login response."""

    broker_code: str
    username: str
    role: str
    bid_permission: bool


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int = 1800  # 30 minutes in seconds
    broker: BrokerInfo


class RefreshResponse(BaseModel):
    access_token: str
    expires_in: int = 1800
