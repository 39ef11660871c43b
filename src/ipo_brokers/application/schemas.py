from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.ipo_brokers.domain.models import Broker, UpiHandler

BrokerRoleLiteral = Literal["admin", "subbroker"]


class BrokerCreateRequest(BaseModel):
    """Every contact field is required; permissions default to off."""

    broker_code: str = Field(..., min_length=1, max_length=32)
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=8, max_length=128)
    mobile: str = Field(..., min_length=1, max_length=20)
    email: str = Field(..., min_length=3, max_length=200)
    pan: str = Field(..., min_length=1, max_length=10)
    bid_permission: bool = False
    login_access: bool = False
    bill_permission: bool = False
    role: BrokerRoleLiteral = "subbroker"


class BrokerUpdateRequest(BaseModel):
    """Partial update. ``password`` resets the login password."""

    username: str | None = Field(None, min_length=3, max_length=64)
    password: str | None = Field(None, min_length=8, max_length=128)
    mobile: str | None = Field(None, min_length=1, max_length=20)
    email: str | None = Field(None, min_length=3, max_length=200)
    pan: str | None = Field(None, min_length=1, max_length=10)
    bid_permission: bool | None = None
    login_access: bool | None = None
    bill_permission: bool | None = None
    role: BrokerRoleLiteral | None = None


class BrokerResponse(BaseModel):
    id: str
    broker_code: str
    username: str
    mobile: str
    email: str
    pan: str
    bid_permission: bool
    login_access: bool
    bill_permission: bool
    role: str
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, broker: Broker) -> "BrokerResponse":
        # password_hash never leaves the service
        return cls(
            id=broker.id,
            broker_code=broker.broker_code,
            username=broker.username,
            mobile=broker.mobile,
            email=broker.email,
            pan=broker.pan,
            bid_permission=broker.bid_permission,
            login_access=broker.login_access,
            bill_permission=broker.bill_permission,
            role=broker.role,
            created_at=broker.created_at,
        )


class UpiHandlerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)


class UpiHandlerResponse(BaseModel):
    id: str
    name: str
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, handler: UpiHandler) -> "UpiHandlerResponse":
        return cls(id=handler.id, name=handler.name, created_at=handler.created_at)
