"""JWT token creation and verification.

Tokens identify a broker by ``broker_code`` (the ``sub`` claim) and carry the
broker's ``role`` so that role guards do not need a second lookup. The broker
row is still loaded on every request to honour ``login_access`` revocation.

HS256 (symmetric HMAC) with a single JWT_SECRET. No token revocation list:
tokens are valid until expiry.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.ipo_common.errors import InvalidCredentialsError, InvalidRefreshTokenError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
_REFRESH_EXPIRE = timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)


def _encode(broker_code: str, role: str, token_type: str, ttl: timedelta) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": broker_code,
        "role": role,
        "type": token_type,
        "iat": now,
        "exp": now + ttl,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def create_access_token(broker_code: str, role: str) -> str:
    """Issue a short-lived access token (default: 30 min)."""
    return _encode(broker_code, role, "access", _ACCESS_EXPIRE)


def create_refresh_token(broker_code: str, role: str) -> str:
    """Issue a long-lived refresh token (default: 7 days)."""
    return _encode(broker_code, role, "refresh", _REFRESH_EXPIRE)


def decode_token(token: str, expected_type: str) -> dict[str, str]:
    """Decode and validate a JWT token.

    Args:
        token: Raw JWT string.
        expected_type: "access" or "refresh". Strictly enforced so a refresh
                       token is never accepted as an access token.

    Returns:
        Decoded payload dict with at minimum {"sub", "role", "type"}.

    Raises:
        InvalidCredentialsError: Token invalid/expired and expected_type="access".
        InvalidRefreshTokenError: Token invalid/expired and expected_type="refresh".
    """
    payload: dict[str, str] = {}
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        _raise_auth_error(expected_type)

    if payload.get("type") != expected_type:
        _raise_auth_error(expected_type)

    return payload


def _raise_auth_error(expected_type: str) -> None:
    if expected_type == "access":
        raise InvalidCredentialsError()
    raise InvalidRefreshTokenError()
