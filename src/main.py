"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from src.ipo_admin.api.router import router as dashboard_router
from src.ipo_bidding.api.router import router as bid_router
from src.ipo_brokers.api.router import broker_router, upi_handler_router
from src.ipo_catalog.api.router import router as ipo_router
from src.ipo_common.database import engine, ping_database
from src.ipo_common.errors import AppError
from src.ipo_common.logging_config import configure_logging
from src.ipo_common.redis_client import close_redis, get_redis
from src.ipo_common.response import error_response
from src.ipo_gateway.api.router import router as auth_router
from src.ipo_gateway.middleware.rate_limit import RateLimitMiddleware
from src.ipo_gateway.middleware.request_log import RequestLogMiddleware
from src.ipo_registry.api.router import router as client_router

configure_logging()
logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    await ping_database()
    await get_redis()
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version=APP_VERSION,
    lifespan=lifespan,
)

# Starlette runs the last-added middleware first: CORS, then request log, then rate limit
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID", "Retry-After"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, exc.details)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(ipo_router, prefix="/api/v1")
app.include_router(client_router, prefix="/api/v1")
app.include_router(bid_router, prefix="/api/v1")
app.include_router(broker_router, prefix="/api/v1")
app.include_router(upi_handler_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": APP_VERSION}
