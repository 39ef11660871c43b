"""Broker and UPI handler domain models — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime

from src.ipo_common.enums import BrokerRole


@dataclass
class Broker:
    id: str
    broker_code: str
    username: str
    password_hash: str
    mobile: str
    email: str
    pan: str
    bid_permission: bool = False
    login_access: bool = False
    bill_permission: bool = False
    role: str = BrokerRole.SUBBROKER.value
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == BrokerRole.ADMIN.value


@dataclass
class UpiHandler:
    id: str
    name: str
    created_at: datetime | None = None
