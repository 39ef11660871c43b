"""Bid domain models — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.ipo_common.enums import (
    BatchStatus,
    DpStatus,
    ExchangeStatus,
    SponsorBankStatus,
)


@dataclass
class Bid:
    id: str
    ipo_id: str
    ipo_name: str
    # Client snapshot at bid time
    client_code: str  # the client's trading code
    client_name: str
    pan: str
    upi_id: str
    # Bid terms
    quantity: int
    price: int  # rupees, normalized (cut-off bids carry the band max)
    use_cutoff: bool
    amount: int  # quantity * price
    category: str  # Retail / HNI
    application_number: str
    broker_code: str
    group_code: str | None = None
    # Settlement pipeline, reported externally
    exchange_code: str = "NSE"
    exchange_status: str = ExchangeStatus.PENDING.value
    dp_status: str = DpStatus.ACTIVE.value
    sponsor_bank_status: str = SponsorBankStatus.PENDING.value
    exchange_datetime: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class BidInput:
    """What the store needs to create a bid; id, statuses and timestamps are its own."""

    ipo_id: str
    ipo_name: str
    client_code: str
    client_name: str
    pan: str
    upi_id: str
    quantity: int
    price: int
    use_cutoff: bool
    amount: int
    category: str
    application_number: str
    broker_code: str
    group_code: str | None = None
    exchange_code: str = "NSE"


@dataclass(frozen=True)
class Accepted:
    """Validator verdict for an admissible bid, with the price already normalized."""

    quantity: int
    price: int
    amount: int
    category: str
    use_cutoff: bool = False


@dataclass(frozen=True)
class BidTemplate:
    """The per-batch part of a bid, shared by every selected client."""

    ipo_id: str
    ipo_name: str
    category: str
    quantity: int
    price: int
    amount: int
    use_cutoff: bool = False

    @classmethod
    def from_accepted(cls, ipo_id: str, ipo_name: str, accepted: Accepted) -> "BidTemplate":
        return cls(
            ipo_id=ipo_id,
            ipo_name=ipo_name,
            category=accepted.category,
            quantity=accepted.quantity,
            price=accepted.price,
            amount=accepted.amount,
            use_cutoff=accepted.use_cutoff,
        )


# ---------------------------------------------------------------------------
# Batch outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Created:
    client_code: str
    bid: Bid
    client_id: str | None = None


@dataclass(frozen=True)
class Failed:
    """``client_code`` is None when the requested ``client_id`` matched no client."""

    client_code: str | None
    reason: str
    error_code: int | None = None
    client_id: str | None = None


Outcome = Created | Failed


@dataclass
class BatchReport:
    outcomes: list[Outcome] = field(default_factory=list)
    interrupted: bool = False

    @property
    def created(self) -> list[Created]:
        return [o for o in self.outcomes if isinstance(o, Created)]

    @property
    def failed(self) -> list[Failed]:
        return [o for o in self.outcomes if isinstance(o, Failed)]

    @property
    def status(self) -> BatchStatus:
        created = len(self.created)
        if created == 0:
            return BatchStatus.NONE_SUBMITTED
        if created == len(self.outcomes):
            return BatchStatus.ALL_SUBMITTED
        return BatchStatus.PARTIAL
