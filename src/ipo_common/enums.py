"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class IpoStatus(str, Enum):
    UPCOMING = "Upcoming"
    ACTIVE = "Active"
    CLOSED = "Closed"


class BidCategory(str, Enum):
    RETAIL = "Retail"
    HNI = "HNI"


class ExchangeStatus(str, Enum):
    """Reported by the exchange after submission; never set by the bid workflow."""
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED_BY_UPI = "Rejected by UPI"
    REJECTED_BY_INVESTOR = "Rejected by Investor"
    REJECTED_BY_INVESTOR_BANK = "Rejected by Investor Bank"
    REJECTED_BY_SPONSOR_BANK = "Rejected by Sponsor Bank"


class SponsorBankStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class DpStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class BrokerRole(str, Enum):
    ADMIN = "admin"
    SUBBROKER = "subbroker"


class BatchStatus(str, Enum):
    """Overall shape of a batch submission."""
    NONE_SUBMITTED = "NONE_SUBMITTED"
    PARTIAL = "PARTIAL"
    ALL_SUBMITTED = "ALL_SUBMITTED"
