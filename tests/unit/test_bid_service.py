"""BidApplicationService with mocked repositories."""

from dataclasses import asdict
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from src.ipo_bidding.application.schemas import (
    BatchBidRequest,
    BidStatusUpdateRequest,
    BidValidateRequest,
)
from src.ipo_bidding.application.service import BidApplicationService
from src.ipo_bidding.domain.models import Bid, BidInput
from src.ipo_common.errors import (
    BidNotFoundError,
    BidRejectedError,
    FetchError,
    IpoNotActiveError,
    IpoNotFoundError,
    ValidationError,
)
from tests.unit.factories import make_bid, make_client, make_ipo


async def _store(db, bid_input: BidInput) -> Bid:
    return Bid(id=f"bid-{bid_input.client_code}", **asdict(bid_input))


@pytest.fixture
def ipo_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_ipo_by_id.return_value = make_ipo()
    return repo


@pytest.fixture
def client_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_clients.return_value = [make_client("C1"), make_client("C2"), make_client("C3")]
    return repo


@pytest.fixture
def bid_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_bids.return_value = []
    repo.create_bid.side_effect = _store
    return repo


@pytest.fixture
def service(bid_repo, ipo_repo, client_repo) -> BidApplicationService:
    return BidApplicationService(bid_repo=bid_repo, ipo_repo=ipo_repo, client_repo=client_repo)


def _batch(**overrides: object) -> BatchBidRequest:
    fields: dict[str, object] = {
        "ipo_id": "ipo-1",
        "category": "Retail",
        "quantity": 10,
        "price": 100,
        "client_ids": ["cli-C1", "cli-C2"],
    }
    fields.update(overrides)
    return BatchBidRequest(**fields)


class TestValidate:
    async def test_accepted(self, service, mock_db) -> None:
        req = BidValidateRequest(ipo_id="ipo-1", category="Retail", quantity=50, price=105)
        result = await service.validate(mock_db, req)
        assert result.amount == 5250
        assert result.amount_display == "₹5,250"

    async def test_rejected_with_every_violation(self, service, mock_db) -> None:
        req = BidValidateRequest(ipo_id="ipo-1", category="Retail", quantity=65, price=200)
        with pytest.raises(BidRejectedError) as exc_info:
            await service.validate(mock_db, req)
        reasons = {d["reason"] for d in exc_info.value.details}
        assert reasons == {"quantity_lot_multiple", "retail_lot_exceeded", "price_out_of_band"}
        assert exc_info.value.http_status == 422

    async def test_no_ipo_selected(self, service, ipo_repo, mock_db) -> None:
        req = BidValidateRequest(category="Retail", quantity=10, price=100)
        with pytest.raises(BidRejectedError) as exc_info:
            await service.validate(mock_db, req)
        assert exc_info.value.violations == [ValidationError("ipo_required")]
        ipo_repo.get_ipo_by_id.assert_not_awaited()

    async def test_unknown_ipo(self, service, ipo_repo, mock_db) -> None:
        ipo_repo.get_ipo_by_id.return_value = None
        req = BidValidateRequest(ipo_id="gone", category="Retail", quantity=10, price=100)
        with pytest.raises(IpoNotFoundError):
            await service.validate(mock_db, req)


class TestEligibleClients:
    async def test_excludes_clients_with_bids(self, service, bid_repo, client_repo, mock_db) -> None:
        bid_repo.list_bids.return_value = [make_bid("C2")]
        result = await service.eligible_clients(mock_db, "ipo-1", "BRK001")
        assert [c.trading_code for c in result] == ["C1", "C3"]
        client_repo.list_clients.assert_awaited_once_with(mock_db, "BRK001", None)
        bid_repo.list_bids.assert_awaited_once_with(mock_db, ipo_id="ipo-1")

    async def test_ipo_not_open(self, service, ipo_repo, mock_db) -> None:
        ipo_repo.get_ipo_by_id.return_value = make_ipo(status="Closed")
        with pytest.raises(IpoNotActiveError):
            await service.eligible_clients(mock_db, "ipo-1", "BRK001")

    async def test_bid_read_failure_is_fetch_error(self, service, bid_repo, mock_db) -> None:
        bid_repo.list_bids.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        with pytest.raises(FetchError) as exc_info:
            await service.eligible_clients(mock_db, "ipo-1", "BRK001")
        assert exc_info.value.http_status == 503

    async def test_client_read_failure_is_fetch_error(self, service, client_repo, bid_repo, mock_db) -> None:
        client_repo.list_clients.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        with pytest.raises(FetchError):
            await service.eligible_clients(mock_db, "ipo-1", "BRK001")
        bid_repo.list_bids.assert_not_awaited()


class TestSubmit:
    async def test_two_clients(self, service, bid_repo, mock_db) -> None:
        report = await service.submit(mock_db, _batch(), "BRK001")
        assert report.status == "ALL_SUBMITTED"
        assert report.created_count == 2
        first = bid_repo.create_bid.await_args_list[0][0][1]
        assert first.broker_code == "BRK001"
        assert first.amount == 1000
        assert first.ipo_name == "Sample Mainboard Ltd"

    async def test_empty_selection(self, service, bid_repo, mock_db) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.submit(mock_db, _batch(client_ids=[]), "BRK001")
        assert exc_info.value.reason == "no_clients_selected"
        bid_repo.create_bid.assert_not_awaited()

    async def test_invalid_terms_never_reach_the_store(self, service, bid_repo, mock_db) -> None:
        with pytest.raises(BidRejectedError):
            await service.submit(mock_db, _batch(quantity=25), "BRK001")
        bid_repo.create_bid.assert_not_awaited()

    async def test_unknown_and_already_bid_clients_fail_without_write(
        self, service, bid_repo, mock_db
    ) -> None:
        bid_repo.list_bids.return_value = [make_bid("C2")]
        req = _batch(client_ids=["cli-C1", "cli-C2", "someone-else", "cli-C3"])
        report = await service.submit(mock_db, req, "BRK001")

        assert report.status == "PARTIAL"
        failed = {
            o.client_id: (o.client_code, o.reason)
            for o in report.outcomes
            if o.result == "Failed"
        }
        assert failed == {
            "cli-C2": ("C2", "already_bid"),
            "someone-else": (None, "client_not_found"),
        }
        written = [c[0][1].client_code for c in bid_repo.create_bid.await_args_list]
        assert written == ["C1", "C3"]

    async def test_nothing_selectable(self, service, bid_repo, mock_db) -> None:
        bid_repo.list_bids.return_value = [make_bid("C1")]
        report = await service.submit(mock_db, _batch(client_ids=["cli-C1"]), "BRK001")
        assert report.status == "NONE_SUBMITTED"
        bid_repo.create_bid.assert_not_awaited()

    async def test_fetch_failure_aborts_before_write(self, service, client_repo, bid_repo, mock_db) -> None:
        client_repo.list_clients.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(FetchError):
            await service.submit(mock_db, _batch(), "BRK001")
        bid_repo.create_bid.assert_not_awaited()

    async def test_cutoff_bid_stored_at_band_max(self, service, bid_repo, mock_db) -> None:
        await service.submit(mock_db, _batch(price=None, use_cutoff=True), "BRK001")
        stored = bid_repo.create_bid.await_args_list[0][0][1]
        assert stored.price == 110
        assert stored.use_cutoff is True


class TestBidRecords:
    async def test_other_brokers_bid_is_not_found(self, service, bid_repo, mock_db) -> None:
        bid_repo.get_bid.return_value = make_bid("C1", broker_code="BRK002")
        with pytest.raises(BidNotFoundError):
            await service.get_bid(mock_db, "bid-C1", "BRK001")

    async def test_admin_sees_any_bid(self, service, bid_repo, mock_db) -> None:
        bid_repo.get_bid.return_value = make_bid("C1", broker_code="BRK002")
        result = await service.get_bid(mock_db, "bid-C1", None)
        assert result.broker_code == "BRK002"

    async def test_rebid_deletes_and_commits(self, service, bid_repo, mock_db) -> None:
        bid_repo.get_bid.return_value = make_bid("C1")
        bid_repo.delete_bid.return_value = True
        await service.rebid(mock_db, "bid-C1", "BRK001")
        bid_repo.delete_bid.assert_awaited_once_with(mock_db, "bid-C1")
        mock_db.commit.assert_awaited_once()

    async def test_update_status_missing_bid_rolls_back(self, service, bid_repo, mock_db) -> None:
        bid_repo.update_bid_status.return_value = None
        with pytest.raises(BidNotFoundError):
            await service.update_status(
                mock_db, "nope", BidStatusUpdateRequest(exchange_status="Accepted")
            )
        mock_db.rollback.assert_awaited_once()
        mock_db.commit.assert_not_awaited()

    async def test_asba_form(self, service, bid_repo, client_repo, mock_db) -> None:
        bid_repo.get_bid.return_value = make_bid(
            "C1", quantity=10_000, price=110, amount=1_100_000, use_cutoff=True,
            created_at=datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc),
        )
        client_repo.get_by_trading_code.return_value = make_client(
            "C1", bank_name="HDFC Bank", branch="Andheri", asba_account="50100012345678"
        )
        form = await service.asba_form(mock_db, "bid-C1", "BRK001")
        assert form.price_label == "Cut-off"
        assert form.amount_display == "₹11,00,000"
        assert form.bank_name == "HDFC Bank"
        assert form.asba_account == "50100012345678"
        assert form.application_date == "2026-10-19"
