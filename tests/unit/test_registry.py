from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from src.ipo_common.errors import ClientExistsError, ClientNotFoundError
from src.ipo_registry.application.schemas import ClientCreateRequest, ClientUpdateRequest
from src.ipo_registry.application.service import ClientApplicationService
from tests.unit.factories import make_client

_VALID = {
    "trading_code": "C9",
    "client_name": "Asha Rao",
    "pan": "ABCPR1234A",
    "dp_id": "IN30000011111111",
    "upi_handle": "asha@okhdfc",
}


class TestClientCreateRequest:
    def test_valid(self) -> None:
        assert ClientCreateRequest(**_VALID).broker_code is None

    @pytest.mark.parametrize("pan", ["abcpr1234a", "ABCPR12345", "ABC1234567"])
    def test_bad_pan(self, pan: str) -> None:
        with pytest.raises(PydanticValidationError):
            ClientCreateRequest(**{**_VALID, "pan": pan})

    def test_upi_needs_handler(self) -> None:
        with pytest.raises(PydanticValidationError):
            ClientCreateRequest(**{**_VALID, "upi_handle": "asha"})


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_trading_code.return_value = None
    repo.create.side_effect = lambda db, client: client
    return repo


class TestClientService:
    async def test_create_under_resolved_broker(self, repo, mock_db) -> None:
        req = ClientCreateRequest(**{**_VALID, "broker_code": "IGNORED"})
        result = await ClientApplicationService(repo).create_client(mock_db, req, "BRK001")
        assert result.broker_code == "BRK001"
        mock_db.commit.assert_awaited_once()

    async def test_duplicate_trading_code(self, repo, mock_db) -> None:
        repo.get_by_trading_code.return_value = make_client("C9")
        with pytest.raises(ClientExistsError):
            await ClientApplicationService(repo).create_client(
                mock_db, ClientCreateRequest(**_VALID), "BRK001"
            )
        repo.create.assert_not_awaited()

    async def test_concurrent_duplicate(self, repo, mock_db) -> None:
        repo.create.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        with pytest.raises(ClientExistsError):
            await ClientApplicationService(repo).create_client(
                mock_db, ClientCreateRequest(**_VALID), "BRK001"
            )
        mock_db.rollback.assert_awaited_once()

    async def test_other_brokers_client_is_not_found(self, repo, mock_db) -> None:
        repo.get_by_id.return_value = make_client("C1", broker_code="BRK002")
        with pytest.raises(ClientNotFoundError):
            await ClientApplicationService(repo).update_client(
                mock_db, "cli-C1", ClientUpdateRequest(client_name="X"), "BRK001"
            )
        repo.update.assert_not_awaited()

    async def test_admin_deletes_any_client(self, repo, mock_db) -> None:
        repo.get_by_id.return_value = make_client("C1", broker_code="BRK002")
        repo.delete.return_value = True
        await ClientApplicationService(repo).delete_client(mock_db, "cli-C1", None)
        mock_db.commit.assert_awaited_once()
