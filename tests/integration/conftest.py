"""Integration-test fixtures.

Needs a migrated database (alembic upgrade head) with the seeded admin and
BRK001 accounts, plus Redis. All tests share one event loop so the
module-level engine and Redis pools stay valid for the whole session.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


async def _login(username: str, password: str) -> AsyncClient:
    ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    resp = await ac.post("/api/v1/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    ac.headers.update({"Authorization": f"Bearer {resp.json()['data']['access_token']}"})
    return ac


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def admin_client() -> AsyncClient:
    ac = await _login("admin", "admin@123")
    yield ac
    await ac.aclose()


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def broker_client() -> AsyncClient:
    ac = await _login("brk001", "broker@123")
    yield ac
    await ac.aclose()
