"""HTTP layer of /api/v1/bids: envelopes, scoping and permission guards."""

from collections.abc import Callable
from dataclasses import asdict
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from src.ipo_bidding.application.service import BidApplicationService
from src.ipo_bidding.domain.models import Bid, BidInput
from src.ipo_brokers.domain.models import Broker
from src.ipo_common.database import get_db_session
from src.ipo_gateway.auth.dependencies import get_current_broker
from src.main import app
from tests.unit.factories import make_bid, make_broker, make_client, make_ipo


async def _store(db, bid_input: BidInput) -> Bid:
    return Bid(id=f"bid-{bid_input.client_code}", **asdict(bid_input))


@pytest.fixture
def repos() -> dict[str, AsyncMock]:
    ipo_repo = AsyncMock()
    ipo_repo.get_ipo_by_id.return_value = make_ipo()
    client_repo = AsyncMock()
    client_repo.list_clients.return_value = [make_client("C1"), make_client("C2")]
    bid_repo = AsyncMock()
    bid_repo.list_bids.return_value = []
    bid_repo.create_bid.side_effect = _store
    return {"bid_repo": bid_repo, "ipo_repo": ipo_repo, "client_repo": client_repo}


@pytest.fixture
def login_as(mock_db, repos) -> Callable[[Broker], None]:
    service = BidApplicationService(**repos)
    patcher = patch("src.ipo_bidding.api.router._service", service)
    patcher.start()

    async def _db():
        yield mock_db

    def _login(broker: Broker) -> None:
        app.dependency_overrides[get_current_broker] = lambda: broker
        app.dependency_overrides[get_db_session] = _db

    yield _login
    patcher.stop()


async def test_validate_returns_amount(client: AsyncClient, login_as) -> None:
    login_as(make_broker())
    resp = await client.post(
        "/api/v1/bids/validate",
        json={"ipo_id": "ipo-1", "category": "Retail", "quantity": 50, "price": 105},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["code"] == 0
    assert body["data"]["amount"] == 5250


async def test_rejected_bid_envelope(client: AsyncClient, login_as) -> None:
    login_as(make_broker())
    resp = await client.post(
        "/api/v1/bids/validate",
        json={"ipo_id": "ipo-1", "category": "Retail", "quantity": 25, "price": 100},
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["code"] == 4002
    assert body["data"] == [
        {
            "reason": "quantity_lot_multiple",
            "params": [10],
            "message": "Quantity must be in multiples of lot size (10)",
        }
    ]


async def test_batch_all_submitted(client: AsyncClient, login_as, repos) -> None:
    login_as(make_broker())
    resp = await client.post(
        "/api/v1/bids/batch",
        json={
            "ipo_id": "ipo-1",
            "category": "Retail",
            "quantity": 10,
            "price": 100,
            "client_ids": ["cli-C1", "cli-C2", "cli-C1"],
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "ALL_SUBMITTED"
    assert [o["client_code"] for o in body["data"]["outcomes"]] == ["C1", "C2"]
    assert repos["bid_repo"].create_bid.await_count == 2


async def test_batch_needs_bid_permission(client: AsyncClient, login_as, repos) -> None:
    login_as(make_broker(bid_permission=False))
    resp = await client.post(
        "/api/v1/bids/batch",
        json={"ipo_id": "ipo-1", "category": "Retail", "quantity": 10, "price": 100,
              "client_ids": ["cli-C1"]},
    )
    assert resp.status_code == 403
    assert resp.json()["code"] == 1005
    repos["bid_repo"].create_bid.assert_not_awaited()


async def test_subbroker_cannot_act_for_another_broker(client: AsyncClient, login_as) -> None:
    login_as(make_broker())
    resp = await client.get(
        "/api/v1/bids/eligible-clients", params={"ipo_id": "ipo-1", "broker_code": "BRK002"}
    )
    assert resp.status_code == 403
    assert resp.json()["code"] == 1008


async def test_admin_picks_broker(client: AsyncClient, login_as, repos) -> None:
    login_as(make_broker(role="admin"))
    resp = await client.get(
        "/api/v1/bids/eligible-clients", params={"ipo_id": "ipo-1", "broker_code": "BRK002"}
    )
    assert resp.status_code == 200
    assert repos["client_repo"].list_clients.await_args[0][1] == "BRK002"


async def test_list_scoped_to_subbroker(client: AsyncClient, login_as, repos) -> None:
    repos["bid_repo"].list_bids.return_value = [make_bid("C1")]
    login_as(make_broker())
    resp = await client.get("/api/v1/bids")
    assert resp.status_code == 200
    assert resp.json()["data"]["total"] == 1
    assert repos["bid_repo"].list_bids.await_args.kwargs["broker_code"] == "BRK001"


async def test_status_update_is_admin_only(client: AsyncClient, login_as) -> None:
    login_as(make_broker())
    resp = await client.patch(
        "/api/v1/bids/bid-C1/status", json={"exchange_status": "Accepted"}
    )
    assert resp.status_code == 403
    assert resp.json()["code"] == 1004


async def test_missing_token_is_401(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/bids")
    assert resp.status_code == 401
