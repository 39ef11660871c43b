# src/ipo_bidding/application/schemas.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.ipo_bidding.domain.models import Accepted, BatchReport, Bid, Created
from src.ipo_common.rupees import rupees_to_display
from src.ipo_registry.domain.models import Client

ExchangeStatusLiteral = Literal[
    "Pending",
    "Accepted",
    "Rejected by UPI",
    "Rejected by Investor",
    "Rejected by Investor Bank",
    "Rejected by Sponsor Bank",
]
SponsorBankStatusLiteral = Literal["Pending", "Accepted", "Rejected"]
DpStatusLiteral = Literal["Active", "Inactive"]


class BidValidateRequest(BaseModel):
    """Bid terms as typed into the form.

    ``category`` is a plain string: an unknown value is reported by the
    validator as category_invalid, next to the other field errors.
    """

    ipo_id: str | None = None
    category: str
    quantity: int
    price: int | None = None
    use_cutoff: bool = False


class BatchBidRequest(BidValidateRequest):
    client_ids: list[str] = Field(default_factory=list)
    broker_code: str | None = None  # administrators only

    @field_validator("client_ids")
    @classmethod
    def dedupe(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class BidStatusUpdateRequest(BaseModel):
    exchange_status: ExchangeStatusLiteral | None = None
    sponsor_bank_status: SponsorBankStatusLiteral | None = None
    dp_status: DpStatusLiteral | None = None


class AcceptedBidResponse(BaseModel):
    category: str
    quantity: int
    price: int
    amount: int
    amount_display: str
    use_cutoff: bool

    @classmethod
    def from_domain(cls, accepted: Accepted) -> "AcceptedBidResponse":
        return cls(
            category=accepted.category,
            quantity=accepted.quantity,
            price=accepted.price,
            amount=accepted.amount,
            amount_display=rupees_to_display(accepted.amount),
            use_cutoff=accepted.use_cutoff,
        )


class EligibleClientResponse(BaseModel):
    id: str
    trading_code: str
    client_name: str
    pan: str
    upi_handle: str
    group_code: str | None = None

    @classmethod
    def from_domain(cls, client: Client) -> "EligibleClientResponse":
        return cls(
            id=client.id,
            trading_code=client.trading_code,
            client_name=client.client_name,
            pan=client.pan,
            upi_handle=client.upi_handle,
            group_code=client.group_code,
        )


class BidResponse(BaseModel):
    id: str
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
    amount_display: str
    category: str
    application_number: str
    broker_code: str
    group_code: str | None = None
    exchange_code: str
    exchange_status: str
    dp_status: str
    sponsor_bank_status: str
    exchange_datetime: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, bid: Bid) -> "BidResponse":
        return cls(
            id=bid.id,
            ipo_id=bid.ipo_id,
            ipo_name=bid.ipo_name,
            client_code=bid.client_code,
            client_name=bid.client_name,
            pan=bid.pan,
            upi_id=bid.upi_id,
            quantity=bid.quantity,
            price=bid.price,
            use_cutoff=bid.use_cutoff,
            amount=bid.amount,
            amount_display=rupees_to_display(bid.amount),
            category=bid.category,
            application_number=bid.application_number,
            broker_code=bid.broker_code,
            group_code=bid.group_code,
            exchange_code=bid.exchange_code,
            exchange_status=bid.exchange_status,
            dp_status=bid.dp_status,
            sponsor_bank_status=bid.sponsor_bank_status,
            exchange_datetime=bid.exchange_datetime,
            created_at=bid.created_at,
            updated_at=bid.updated_at,
        )


class BidListResponse(BaseModel):
    items: list[BidResponse]
    total: int


class OutcomeResponse(BaseModel):
    client_id: str | None = None  # as requested
    client_code: str | None = None  # None when client_id matched no client
    result: Literal["Created", "Failed"]
    bid: BidResponse | None = None
    reason: str | None = None
    error_code: int | None = None


class BatchReportResponse(BaseModel):
    status: str  # NONE_SUBMITTED / PARTIAL / ALL_SUBMITTED
    interrupted: bool
    created_count: int
    failed_count: int
    outcomes: list[OutcomeResponse]

    @classmethod
    def from_domain(cls, report: BatchReport) -> "BatchReportResponse":
        outcomes = []
        for o in report.outcomes:
            if isinstance(o, Created):
                outcomes.append(
                    OutcomeResponse(
                        client_id=o.client_id,
                        client_code=o.client_code,
                        result="Created",
                        bid=BidResponse.from_domain(o.bid),
                    )
                )
            else:
                outcomes.append(
                    OutcomeResponse(
                        client_id=o.client_id,
                        client_code=o.client_code,
                        result="Failed",
                        reason=o.reason,
                        error_code=o.error_code,
                    )
                )
        return cls(
            status=report.status.value,
            interrupted=report.interrupted,
            created_count=len(report.created),
            failed_count=len(report.failed),
            outcomes=outcomes,
        )


class AsbaFormResponse(BaseModel):
    """Printable ASBA application, amounts already formatted for the form."""

    application_number: str
    ipo_name: str
    category: str
    # Applicant
    client_code: str
    client_name: str
    pan: str
    mobile: str | None = None
    email: str | None = None
    # Depository / bank
    dp_id: str | None = None
    upi_id: str
    bank_name: str | None = None
    branch: str | None = None
    asba_account: str | None = None
    # Bid
    quantity: int
    price: int
    price_label: str  # "Cut-off" or the bid price
    amount: int
    amount_display: str
    broker_code: str
    application_date: str | None = None
