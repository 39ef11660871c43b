"""Domain object factories shared by the unit tests."""

from src.ipo_bidding.domain.models import Bid
from src.ipo_brokers.domain.models import Broker
from src.ipo_catalog.domain.models import Ipo
from src.ipo_registry.domain.models import Client


def make_ipo(**overrides: object) -> Ipo:
    """Lot 10, band 100-110, retail max 5 lots, HNI max 10,00,000."""
    fields: dict[str, object] = {
        "id": "ipo-1",
        "name": "Sample Mainboard Ltd",
        "category": "Mainboard",
        "status": "Active",
        "price_band_min": 100,
        "price_band_max": 110,
        "lot_size": 10,
        "retail_max_lot": 5,
        "hni_max_amount": 1_000_000,
    }
    fields.update(overrides)
    return Ipo(**fields)  # type: ignore[arg-type]


def make_client(code: str, broker_code: str = "BRK001", **overrides: object) -> Client:
    fields: dict[str, object] = {
        "id": f"cli-{code}",
        "trading_code": code,
        "client_name": f"Client {code}",
        "pan": "ABCPR1234A",
        "dp_id": "IN30000011111111",
        "upi_handle": f"{code.lower()}@okhdfc",
        "broker_code": broker_code,
    }
    fields.update(overrides)
    return Client(**fields)  # type: ignore[arg-type]


def make_bid(client_code: str, ipo_id: str = "ipo-1", **overrides: object) -> Bid:
    fields: dict[str, object] = {
        "id": f"bid-{client_code}",
        "ipo_id": ipo_id,
        "ipo_name": "Sample Mainboard Ltd",
        "client_code": client_code,
        "client_name": f"Client {client_code}",
        "pan": "ABCPR1234A",
        "upi_id": f"{client_code.lower()}@okhdfc",
        "quantity": 10,
        "price": 100,
        "use_cutoff": False,
        "amount": 1000,
        "category": "Retail",
        "application_number": f"APP{client_code}",
        "broker_code": "BRK001",
    }
    fields.update(overrides)
    return Bid(**fields)  # type: ignore[arg-type]


def make_broker(role: str = "subbroker", **overrides: object) -> Broker:
    fields: dict[str, object] = {
        "id": "brk-1",
        "broker_code": "BRK001" if role == "subbroker" else "ADMIN",
        "username": "brk001" if role == "subbroker" else "admin",
        "password_hash": "$2b$12$fakehash",
        "mobile": "9000000001",
        "email": "brk001@example.com",
        "pan": "AAAPB0001B",
        "bid_permission": True,
        "login_access": True,
        "role": role,
    }
    fields.update(overrides)
    return Broker(**fields)  # type: ignore[arg-type]
