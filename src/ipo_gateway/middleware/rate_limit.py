"""Login rate limiting middleware.

Fixed-window counter in Redis guarding the login endpoint against
brute force: LOGIN_RATE_LIMIT_PER_MINUTE requests per minute per client IP.

  - Key pattern: "ratelimit:{ip}:login"
  - Client IP is the first X-Forwarded-For entry when behind a proxy
  - Exceeding the limit returns 429 (code 9001) with a Retry-After header

Errors raised inside a BaseHTTPMiddleware bypass FastAPI exception handlers,
so the 429 envelope is rendered here directly.
"""

import logging

from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from config.settings import settings
from src.ipo_common.errors import RateLimitError
from src.ipo_common.redis_client import get_redis
from src.ipo_common.response import error_response

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60
_LIMITED_PATHS = frozenset({"/api/v1/auth/login"})


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method != "POST" or request.url.path not in _LIMITED_PATHS:
            return await call_next(request)

        key = f"ratelimit:{client_ip(request)}:login"
        try:
            redis = await get_redis()
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, _WINDOW_SECONDS)
            ttl = await redis.ttl(key) if count > settings.LOGIN_RATE_LIMIT_PER_MINUTE else 0
        except RedisError:
            # Limiter unavailable: fail open
            logger.warning("Rate limiter unavailable, skipping check for %s", key)
            return await call_next(request)

        if count > settings.LOGIN_RATE_LIMIT_PER_MINUTE:
            err = RateLimitError()
            return JSONResponse(
                status_code=err.http_status,
                content=error_response(err.code, err.message).model_dump(),
                headers={"Retry-After": str(ttl if ttl and ttl > 0 else _WINDOW_SECONDS)},
            )
        return await call_next(request)
