"""End-to-end bid placement against PostgreSQL.

IPO and client names carry a random suffix so the flow can be re-run
against the same database.
"""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = [pytest.mark.integration, pytest.mark.asyncio(loop_scope="session")]

_SUFFIX = uuid.uuid4().hex[:8].upper()
_state: dict[str, str] = {}


async def test_admin_creates_active_ipo(admin_client: AsyncClient) -> None:
    resp = await admin_client.post("/api/v1/ipos", json={
        "name": f"Flow Test {_SUFFIX} Ltd",
        "category": "Mainboard",
        "status": "Active",
        "price_band_min": 100,
        "price_band_max": 110,
        "lot_size": 10,
        "retail_max_lot": 5,
        "hni_max_amount": 1_000_000,
    })
    assert resp.status_code == 201, resp.text
    _state["ipo_id"] = resp.json()["data"]["id"]


async def test_broker_cannot_create_ipo(broker_client: AsyncClient) -> None:
    resp = await broker_client.post("/api/v1/ipos", json={
        "name": "Not Allowed Ltd", "category": "SME", "price_band_min": 1,
        "price_band_max": 2, "lot_size": 1, "retail_max_lot": 1, "hni_max_amount": 1,
    })
    assert resp.status_code == 403


async def test_broker_registers_clients(broker_client: AsyncClient) -> None:
    for n in (1, 2):
        resp = await broker_client.post("/api/v1/clients", json={
            "trading_code": f"F{_SUFFIX}{n}",
            "client_name": f"Flow Client {n}",
            "pan": "ABCPF1234F",
            "dp_id": "IN30000099999999",
            "upi_handle": f"flow{n}@okhdfc",
        })
        assert resp.status_code == 201, resp.text
        assert resp.json()["data"]["broker_code"] == "BRK001"
        _state[f"client{n}"] = resp.json()["data"]["id"]


async def test_validate_reports_every_violation(broker_client: AsyncClient) -> None:
    resp = await broker_client.post("/api/v1/bids/validate", json={
        "ipo_id": _state["ipo_id"], "category": "Retail", "quantity": 65, "price": 120,
    })
    assert resp.status_code == 422
    reasons = {d["reason"] for d in resp.json()["data"]}
    assert reasons == {"quantity_lot_multiple", "retail_lot_exceeded", "price_out_of_band"}


async def test_new_clients_are_eligible(broker_client: AsyncClient) -> None:
    resp = await broker_client.get(
        "/api/v1/bids/eligible-clients", params={"ipo_id": _state["ipo_id"]}
    )
    assert resp.status_code == 200
    ids = {c["id"] for c in resp.json()["data"]}
    assert {_state["client1"], _state["client2"]} <= ids


async def test_batch_submit(broker_client: AsyncClient) -> None:
    resp = await broker_client.post("/api/v1/bids/batch", json={
        "ipo_id": _state["ipo_id"],
        "category": "Retail",
        "quantity": 20,
        "use_cutoff": True,
        "client_ids": [_state["client1"], _state["client2"]],
    })
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["status"] == "ALL_SUBMITTED"
    bids = [o["bid"] for o in data["outcomes"]]
    assert all(b["price"] == 110 and b["amount"] == 2200 for b in bids)
    assert len({b["application_number"] for b in bids}) == 2
    _state["bid1"] = bids[0]["id"]


async def test_second_batch_is_refused_per_client(broker_client: AsyncClient) -> None:
    resp = await broker_client.post("/api/v1/bids/batch", json={
        "ipo_id": _state["ipo_id"],
        "category": "Retail",
        "quantity": 10,
        "price": 100,
        "client_ids": [_state["client1"]],
    })
    data = resp.json()["data"]
    assert data["status"] == "NONE_SUBMITTED"
    assert data["outcomes"][0]["reason"] == "already_bid"


async def test_bidders_drop_out_of_eligible(broker_client: AsyncClient) -> None:
    resp = await broker_client.get(
        "/api/v1/bids/eligible-clients", params={"ipo_id": _state["ipo_id"]}
    )
    ids = {c["id"] for c in resp.json()["data"]}
    assert _state["client1"] not in ids
    assert _state["client2"] not in ids


async def test_asba_form(broker_client: AsyncClient) -> None:
    resp = await broker_client.get(f"/api/v1/bids/{_state['bid1']}/asba-form")
    assert resp.status_code == 200
    form = resp.json()["data"]
    assert form["price_label"] == "Cut-off"
    assert form["amount_display"] == "₹2,200"


async def test_rebid_makes_client_eligible_again(broker_client: AsyncClient) -> None:
    resp = await broker_client.delete(f"/api/v1/bids/{_state['bid1']}")
    assert resp.status_code == 200
    resp = await broker_client.get(
        "/api/v1/bids/eligible-clients", params={"ipo_id": _state["ipo_id"]}
    )
    ids = {c["id"] for c in resp.json()["data"]}
    assert _state["client1"] in ids
    assert _state["client2"] not in ids


async def test_admin_sets_exchange_status(admin_client: AsyncClient, broker_client: AsyncClient) -> None:
    listing = await broker_client.get("/api/v1/bids", params={"ipo_id": _state["ipo_id"]})
    bid_id = listing.json()["data"]["items"][0]["id"]
    resp = await admin_client.patch(
        f"/api/v1/bids/{bid_id}/status", json={"exchange_status": "Accepted"}
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["exchange_status"] == "Accepted"


async def test_broker_dashboard(broker_client: AsyncClient) -> None:
    resp = await broker_client.get("/api/v1/dashboard/broker")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["broker_code"] == "BRK001"
    assert data["exchange_accepted"] >= 1
