# src/ipo_bidding/domain/repository.py
"""BidRepository Protocol — interface contract for the bid record store."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_bidding.domain.models import Bid, BidInput


class BidRepositoryProtocol(Protocol):
    async def list_bids(
        self,
        db: AsyncSession,
        ipo_id: str | None = None,
        broker_code: str | None = None,
    ) -> list[Bid]: ...

    async def get_bid(self, db: AsyncSession, bid_id: str) -> Bid | None: ...

    async def create_bid(self, db: AsyncSession, bid_input: BidInput) -> Bid:
        """Insert one bid. Raises DuplicateBidError / ApplicationNumberConflictError
        on the matching unique constraint, WriteError on any other store failure."""
        ...

    async def update_bid_status(
        self,
        db: AsyncSession,
        bid_id: str,
        exchange_status: str | None = None,
        sponsor_bank_status: str | None = None,
        dp_status: str | None = None,
    ) -> Bid | None: ...

    async def delete_bid(self, db: AsyncSession, bid_id: str) -> bool: ...
