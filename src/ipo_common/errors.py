"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Broker
  2xxx: Client registry
  3xxx: IPO catalog
  4xxx: Bid
  5xxx: UPI handler
  9xxx: System
"""

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        details: Any = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details
        super().__init__(message)


# --- 1xxx: Auth/Broker ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid username or password", 401)


class LoginAccessDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Login access is disabled for this broker", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Refresh token is invalid or expired", 401)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Administrator role required", 403)


class BidPermissionDeniedError(AppError):
    def __init__(self, broker_code: str) -> None:
        super().__init__(1005, f"Broker {broker_code} has no bid permission", 403)


class BrokerExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1006, "Broker with this code or username already exists", 409)


class BrokerNotFoundError(AppError):
    def __init__(self, broker_id: str) -> None:
        super().__init__(1007, f"Broker not found: {broker_id}", 404)


class BrokerScopeError(AppError):
    def __init__(self, broker_code: str) -> None:
        super().__init__(1008, f"Not allowed to act for broker {broker_code}", 403)


class BrokerInUseError(AppError):
    def __init__(self, broker_id: str) -> None:
        super().__init__(1009, f"Broker {broker_id} still owns clients", 409)


# --- 2xxx: Client registry ---

class ClientNotFoundError(AppError):
    def __init__(self, client_id: str) -> None:
        super().__init__(2001, f"Client not found: {client_id}", 404)


class ClientExistsError(AppError):
    def __init__(self, trading_code: str) -> None:
        super().__init__(2002, f"Client with trading code {trading_code} already exists", 409)


# --- 3xxx: IPO catalog ---

class IpoNotFoundError(AppError):
    def __init__(self, ipo_id: str) -> None:
        super().__init__(3001, f"IPO not found: {ipo_id}", 404)


class IpoNotActiveError(AppError):
    def __init__(self, ipo_id: str) -> None:
        super().__init__(3002, f"IPO is not open for bidding: {ipo_id}", 422)


# --- 4xxx: Bid ---

_VALIDATION_MESSAGES: dict[str, str] = {
    "ipo_required": "Please select an IPO",
    "category_invalid": "Bid category must be Retail or HNI",
    "quantity_positive": "Quantity must be greater than 0",
    "quantity_lot_multiple": "Quantity must be in multiples of lot size ({0})",
    "retail_lot_exceeded": "Max retail lots for this IPO is {0}",
    "hni_amount_exceeded": "Total bid amount cannot exceed {0}",
    "price_required": "Price is required",
    "price_out_of_band": "Price must be between {0} and {1}",
    "no_clients_selected": "Please select at least one client",
}


class ValidationError(AppError):
    """User-correctable input problem, reported before any write.

    ``reason`` is a stable machine key; ``params`` carries the limits the
    message refers to (lot size, band bounds, ...).
    """

    def __init__(self, reason: str, *params: int) -> None:
        self.reason = reason
        self.params = params
        template = _VALIDATION_MESSAGES.get(reason, reason)
        super().__init__(
            4001,
            template.format(*params),
            422,
            details=[{"reason": reason, "params": list(params)}],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.reason == other.reason and self.params == other.params

    def __hash__(self) -> int:
        return hash((self.reason, self.params))

    def __repr__(self) -> str:
        return f"ValidationError({self.reason!r}, {', '.join(map(str, self.params))})"


class BidRejectedError(AppError):
    """Every validation violation of one bid, raised together."""

    def __init__(self, violations: list[ValidationError]) -> None:
        self.violations = violations
        super().__init__(
            4002,
            "; ".join(v.message for v in violations),
            422,
            details=[
                {"reason": v.reason, "params": list(v.params), "message": v.message}
                for v in violations
            ],
        )


class WriteError(AppError):
    """A single client's bid creation failed. Collected per client, not thrown across a batch."""

    def __init__(self, detail: str, code: int = 4003, http_status: int = 500) -> None:
        super().__init__(code, f"Bid write failed: {detail}", http_status)


class DuplicateBidError(WriteError):
    def __init__(self, ipo_id: str, client_code: str) -> None:
        super().__init__(
            f"client {client_code} already has a bid for IPO {ipo_id}",
            code=4004,
            http_status=409,
        )


class ApplicationNumberConflictError(WriteError):
    def __init__(self, application_number: str) -> None:
        super().__init__(
            f"application number {application_number} already in use",
            code=4005,
            http_status=409,
        )


class BidNotFoundError(AppError):
    def __init__(self, bid_id: str) -> None:
        super().__init__(4006, f"Bid not found: {bid_id}", 404)


# --- 5xxx: UPI handler ---

class UpiHandlerExistsError(AppError):
    def __init__(self, name: str) -> None:
        super().__init__(5001, f"UPI handler already exists: {name}", 409)


class UpiHandlerNotFoundError(AppError):
    def __init__(self, handler_id: str) -> None:
        super().__init__(5002, f"UPI handler not found: {handler_id}", 404)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class FetchError(AppError):
    """An upstream read failed; the operation is aborted before any write."""

    def __init__(self, what: str) -> None:
        super().__init__(9003, f"Failed to load {what}, please retry", 503)
