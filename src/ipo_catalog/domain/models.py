"""Domain models for ipo_catalog — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import date, datetime

from src.ipo_common.enums import IpoStatus


@dataclass
class Ipo:
    id: str
    name: str
    category: str  # Mainboard / SME
    status: str  # Upcoming / Active / Closed
    price_band_min: int  # rupees
    price_band_max: int  # rupees
    lot_size: int
    retail_max_lot: int
    hni_max_amount: int  # rupees
    open_date: date | None = None
    close_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_open_for_bidding(self) -> bool:
        return self.status == IpoStatus.ACTIVE.value
