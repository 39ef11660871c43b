from types import SimpleNamespace
from unittest.mock import MagicMock

from src.ipo_admin.application.service import DashboardService

_BID_COUNTS = SimpleNamespace(
    total_applications=7,
    sponsor_bank_accepted=3,
    sponsor_bank_pending=4,
    exchange_accepted=2,
    rejected_by_upi=1,
    rejected_by_investor=0,
    rejected_by_investor_bank=0,
    rejected_by_sponsor_bank=1,
)


def _row(row: object) -> MagicMock:
    result = MagicMock()
    result.fetchone.return_value = row
    return result


def _scalar(value: int) -> MagicMock:
    result = MagicMock()
    result.scalar_one.return_value = value
    return result


async def test_admin_summary(mock_db) -> None:
    mock_db.execute.side_effect = [
        _row(SimpleNamespace(total_ipos=4, active_ipos=2)),
        _scalar(12),
        _scalar(3),
        _row(_BID_COUNTS),
    ]
    summary = await DashboardService().admin_summary(mock_db)
    assert summary["total_ipos"] == 4
    assert summary["active_ipos"] == 2
    assert summary["total_clients"] == 12
    assert summary["total_brokers"] == 3
    assert summary["total_applications"] == 7
    assert summary["rejected_by_sponsor_bank"] == 1


async def test_broker_summary_is_filtered(mock_db) -> None:
    mock_db.execute.side_effect = [
        _row(SimpleNamespace(total_ipos=4, active_ipos=2)),
        _scalar(5),
        _row(_BID_COUNTS),
    ]
    summary = await DashboardService().broker_summary("BRK001", mock_db)
    assert summary["broker_code"] == "BRK001"
    assert summary["total_clients"] == 5
    assert "total_brokers" not in summary
    for call in mock_db.execute.await_args_list[1:]:
        assert call[0][1] == {"broker_code": "BRK001"}
