"""FastAPI dependencies: get_current_broker, require_admin, require_bid_permission.

Usage in any protected router:
    from src.ipo_gateway.auth.dependencies import get_current_broker

    @router.get("/protected")
    async def protected(broker: Broker = Depends(get_current_broker)):
        ...

Broker scoping is explicit: handlers pass ``resolve_broker_code(broker, requested)``
down to services instead of reading any ambient "current broker".
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.domain.models import Broker
from src.ipo_brokers.infrastructure.persistence import BrokerRepository
from src.ipo_common.database import get_db_session
from src.ipo_common.errors import (
    AdminRequiredError,
    BidPermissionDeniedError,
    BrokerScopeError,
    InvalidCredentialsError,
    LoginAccessDisabledError,
)
from src.ipo_gateway.auth.jwt_handler import decode_token

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)

_broker_repo = BrokerRepository()


async def get_current_broker(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Broker:
    """Extract and validate the JWT Bearer token, return the Broker.

    Raises HTTP 401 if the token is missing, invalid, or expired.
    Raises HTTP 403 (LoginAccessDisabledError) if login access was revoked.
    """
    try:
        payload = decode_token(token, expected_type="access")
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    broker_code: str | None = payload.get("sub")
    if not broker_code:
        raise _CREDENTIALS_EXCEPTION

    broker = await _broker_repo.get_by_code(db, broker_code)
    if broker is None:
        raise _CREDENTIALS_EXCEPTION

    if not broker.login_access:
        raise LoginAccessDisabledError()

    return broker


async def require_admin(
    current_broker: Broker = Depends(get_current_broker),
) -> Broker:
    """Administrator-only endpoints (IPO master, broker and UPI handler management)."""
    if not current_broker.is_admin:
        raise AdminRequiredError()
    return current_broker


async def require_bid_permission(
    current_broker: Broker = Depends(get_current_broker),
) -> Broker:
    """Bid placement requires bid_permission; administrators always have it."""
    if not (current_broker.is_admin or current_broker.bid_permission):
        raise BidPermissionDeniedError(current_broker.broker_code)
    return current_broker


def resolve_broker_code(current_broker: Broker, requested: str | None) -> str:
    """Broker code an operation acts for.

    Sub-brokers always act for themselves; asking for another code is refused.
    Administrators act for ``requested`` when given, else for their own code.
    """
    if requested is None or requested == current_broker.broker_code:
        return current_broker.broker_code
    if not current_broker.is_admin:
        raise BrokerScopeError(requested)
    return requested


def broker_filter(current_broker: Broker, requested: str | None) -> str | None:
    """Broker-code filter for list endpoints.

    Administrators see everything unless they ask for one broker (None = no
    filter); sub-brokers are always restricted to their own code.
    """
    if current_broker.is_admin:
        return requested
    return resolve_broker_code(current_broker, requested)
