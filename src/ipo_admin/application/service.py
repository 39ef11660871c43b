# src/ipo_admin/application/service.py
"""Dashboard aggregation: counts straight from SQL, no caching."""
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

_IPO_COUNTS_SQL = text("""
    SELECT
        COUNT(*) AS total_ipos,
        COUNT(*) FILTER (WHERE status = 'Active') AS active_ipos
    FROM ipos
""")

_BID_STATUS_SQL = text("""
    SELECT
        COUNT(*) AS total_applications,
        COUNT(*) FILTER (WHERE sponsor_bank_status = 'Accepted') AS sponsor_bank_accepted,
        COUNT(*) FILTER (WHERE sponsor_bank_status = 'Pending') AS sponsor_bank_pending,
        COUNT(*) FILTER (WHERE exchange_status = 'Accepted') AS exchange_accepted,
        COUNT(*) FILTER (WHERE exchange_status = 'Rejected by UPI') AS rejected_by_upi,
        COUNT(*) FILTER (WHERE exchange_status = 'Rejected by Investor') AS rejected_by_investor,
        COUNT(*) FILTER (WHERE exchange_status = 'Rejected by Investor Bank')
            AS rejected_by_investor_bank,
        COUNT(*) FILTER (WHERE exchange_status = 'Rejected by Sponsor Bank')
            AS rejected_by_sponsor_bank
    FROM bids
    WHERE (CAST(:broker_code AS TEXT) IS NULL OR broker_code = CAST(:broker_code AS TEXT))
""")

_CLIENT_COUNT_SQL = text("""
    SELECT COUNT(*) FROM clients
    WHERE (CAST(:broker_code AS TEXT) IS NULL OR broker_code = CAST(:broker_code AS TEXT))
""")

_BROKER_COUNT_SQL = text("SELECT COUNT(*) FROM brokers WHERE role = 'subbroker'")

_BID_STATUS_KEYS = (
    "total_applications",
    "sponsor_bank_accepted",
    "sponsor_bank_pending",
    "exchange_accepted",
    "rejected_by_upi",
    "rejected_by_investor",
    "rejected_by_investor_bank",
    "rejected_by_sponsor_bank",
)


class DashboardService:
    async def _bid_status_counts(
        self, broker_code: str | None, db: AsyncSession
    ) -> dict[str, int]:
        row = (await db.execute(_BID_STATUS_SQL, {"broker_code": broker_code})).fetchone()
        return {k: int(getattr(row, k)) if row else 0 for k in _BID_STATUS_KEYS}

    async def admin_summary(self, db: AsyncSession) -> dict[str, Any]:
        ipos = (await db.execute(_IPO_COUNTS_SQL)).fetchone()
        clients = (await db.execute(_CLIENT_COUNT_SQL, {"broker_code": None})).scalar_one()
        brokers = (await db.execute(_BROKER_COUNT_SQL)).scalar_one()
        return {
            "total_ipos": int(ipos.total_ipos) if ipos else 0,
            "active_ipos": int(ipos.active_ipos) if ipos else 0,
            "total_clients": int(clients),
            "total_brokers": int(brokers),
            **await self._bid_status_counts(None, db),
        }

    async def broker_summary(self, broker_code: str, db: AsyncSession) -> dict[str, Any]:
        ipos = (await db.execute(_IPO_COUNTS_SQL)).fetchone()
        clients = (
            await db.execute(_CLIENT_COUNT_SQL, {"broker_code": broker_code})
        ).scalar_one()
        return {
            "broker_code": broker_code,
            "active_ipos": int(ipos.active_ipos) if ipos else 0,
            "total_clients": int(clients),
            **await self._bid_status_counts(broker_code, db),
        }
