"""Client domain model — pure dataclass."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Client:
    id: str
    trading_code: str  # unique per broker; bids reference it as client_code
    client_name: str
    pan: str
    dp_id: str
    upi_handle: str
    broker_code: str
    mobile: str | None = None
    email: str | None = None
    group_code: str | None = None
    bank_name: str | None = None
    branch: str | None = None
    asba_account: str | None = None  # bank account blocked for ASBA
    created_at: datetime | None = None
    updated_at: datetime | None = None
