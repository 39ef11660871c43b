# src/ipo_bidding/application/service.py
"""BidApplicationService — the bid placement workflow.

validate -> eligible clients -> batch submit. Every read the eligibility
decision depends on happens before the first write; a failed read aborts the
whole operation as FetchError instead of computing from partial data.

``broker_code`` is always passed in by the router (see
``resolve_broker_code``); ``None`` means "all brokers" and is only ever
passed for administrators.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_bidding.application.schemas import (
    AcceptedBidResponse,
    AsbaFormResponse,
    BatchBidRequest,
    BatchReportResponse,
    BidListResponse,
    BidResponse,
    BidStatusUpdateRequest,
    BidValidateRequest,
    EligibleClientResponse,
)
from src.ipo_bidding.domain.eligibility import compute_eligible_clients
from src.ipo_bidding.domain.models import (
    Accepted,
    BatchReport,
    Bid,
    BidTemplate,
    Failed,
)
from src.ipo_bidding.domain.repository import BidRepositoryProtocol
from src.ipo_bidding.domain.submitter import submit_batch
from src.ipo_bidding.domain.validator import validate_bid
from src.ipo_bidding.infrastructure.persistence import BidRepository
from src.ipo_catalog.domain.models import Ipo
from src.ipo_catalog.domain.repository import IpoRepositoryProtocol
from src.ipo_catalog.infrastructure.persistence import IpoRepository
from src.ipo_common.errors import (
    BidNotFoundError,
    BidRejectedError,
    FetchError,
    IpoNotActiveError,
    IpoNotFoundError,
    ValidationError,
)
from src.ipo_common.rupees import rupees_to_display
from src.ipo_registry.domain.models import Client
from src.ipo_registry.domain.repository import ClientRepositoryProtocol
from src.ipo_registry.infrastructure.persistence import ClientRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Per-client failure reasons decided before any write
CLIENT_NOT_FOUND = "client_not_found"
ALREADY_BID = "already_bid"


async def _fetch(what: str, call: Awaitable[T]) -> T:
    try:
        return await call
    except SQLAlchemyError as e:
        logger.error("Failed to load %s: %s", what, e)
        raise FetchError(what) from e


class BidApplicationService:
    def __init__(
        self,
        bid_repo: BidRepositoryProtocol | None = None,
        ipo_repo: IpoRepositoryProtocol | None = None,
        client_repo: ClientRepositoryProtocol | None = None,
    ) -> None:
        self._bids: BidRepositoryProtocol = bid_repo or BidRepository()
        self._ipos: IpoRepositoryProtocol = ipo_repo or IpoRepository()
        self._clients: ClientRepositoryProtocol = client_repo or ClientRepository()

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    async def _load_ipo(self, db: AsyncSession, ipo_id: str) -> Ipo:
        ipo = await _fetch("IPO", self._ipos.get_ipo_by_id(db, ipo_id))
        if ipo is None:
            raise IpoNotFoundError(ipo_id)
        return ipo

    async def _check(self, db: AsyncSession, req: BidValidateRequest) -> tuple[Ipo, Accepted]:
        """Run the validator; raise BidRejectedError carrying every violation."""
        if req.ipo_id is None:
            raise BidRejectedError([ValidationError("ipo_required")])
        ipo = await self._load_ipo(db, req.ipo_id)
        verdict = validate_bid(ipo, req.category, req.quantity, req.price, req.use_cutoff)
        if isinstance(verdict, list):
            raise BidRejectedError(verdict)
        return ipo, verdict

    async def _load_eligibility(
        self, db: AsyncSession, ipo: Ipo, broker_code: str
    ) -> tuple[list[Client], list[Client]]:
        """(all of the broker's clients, those without a bid on ``ipo``)."""
        if not ipo.is_open_for_bidding:
            raise IpoNotActiveError(ipo.id)
        clients = await _fetch("clients", self._clients.list_clients(db, broker_code, None))
        existing = await _fetch("existing bids", self._bids.list_bids(db, ipo_id=ipo.id))
        return clients, compute_eligible_clients(clients, existing)

    async def validate(self, db: AsyncSession, req: BidValidateRequest) -> AcceptedBidResponse:
        _, accepted = await self._check(db, req)
        return AcceptedBidResponse.from_domain(accepted)

    async def eligible_clients(
        self, db: AsyncSession, ipo_id: str, broker_code: str
    ) -> list[EligibleClientResponse]:
        ipo = await self._load_ipo(db, ipo_id)
        _, eligible = await self._load_eligibility(db, ipo, broker_code)
        return [EligibleClientResponse.from_domain(c) for c in eligible]

    async def submit(
        self, db: AsyncSession, req: BatchBidRequest, broker_code: str
    ) -> BatchReportResponse:
        ipo, accepted = await self._check(db, req)
        if not req.client_ids:
            raise ValidationError("no_clients_selected")
        clients, eligible = await self._load_eligibility(db, ipo, broker_code)

        by_id = {c.id: c for c in clients}
        eligible_ids = {c.id for c in eligible}
        report = BatchReport()
        selected: list[Client] = []
        for client_id in req.client_ids:
            client = by_id.get(client_id)
            if client is None:
                report.outcomes.append(Failed(None, CLIENT_NOT_FOUND, 2001, client_id))
            elif client.id not in eligible_ids:
                report.outcomes.append(Failed(client.trading_code, ALREADY_BID, 4004, client.id))
            else:
                selected.append(client)

        if selected:
            template = BidTemplate.from_accepted(ipo.id, ipo.name, accepted)
            try:
                await submit_batch(template, selected, broker_code, self._bids, db, report=report)
            except asyncio.CancelledError:
                logger.warning(
                    "Bid submission cancelled: ipo=%s broker=%s created=%d",
                    ipo.id, broker_code, len(report.created),
                )
                raise
        else:
            logger.info(
                "Bid submission: nothing to write for ipo=%s broker=%s", ipo.id, broker_code
            )
        return BatchReportResponse.from_domain(report)

    # ------------------------------------------------------------------
    # Bid records
    # ------------------------------------------------------------------

    async def _get_scoped(self, db: AsyncSession, bid_id: str, broker_code: str | None) -> Bid:
        bid = await self._bids.get_bid(db, bid_id)
        # Another broker's bid is reported as missing
        if bid is None or (broker_code is not None and bid.broker_code != broker_code):
            raise BidNotFoundError(bid_id)
        return bid

    async def list_bids(
        self, db: AsyncSession, ipo_id: str | None, broker_code: str | None
    ) -> BidListResponse:
        bids = await self._bids.list_bids(db, ipo_id=ipo_id, broker_code=broker_code)
        return BidListResponse(items=[BidResponse.from_domain(b) for b in bids], total=len(bids))

    async def get_bid(
        self, db: AsyncSession, bid_id: str, broker_code: str | None
    ) -> BidResponse:
        return BidResponse.from_domain(await self._get_scoped(db, bid_id, broker_code))

    async def update_status(
        self, db: AsyncSession, bid_id: str, req: BidStatusUpdateRequest
    ) -> BidResponse:
        try:
            bid = await self._bids.update_bid_status(
                db,
                bid_id,
                exchange_status=req.exchange_status,
                sponsor_bank_status=req.sponsor_bank_status,
                dp_status=req.dp_status,
            )
            if bid is None:
                raise BidNotFoundError(bid_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Bid status updated: id=%s %s", bid_id, req.model_dump(exclude_none=True))
        return BidResponse.from_domain(bid)

    async def rebid(self, db: AsyncSession, bid_id: str, broker_code: str | None) -> None:
        """Delete the bid so its client shows up as eligible again."""
        bid = await self._get_scoped(db, bid_id, broker_code)
        try:
            if not await self._bids.delete_bid(db, bid_id):
                raise BidNotFoundError(bid_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Bid deleted for rebid: id=%s ipo=%s client=%s", bid_id, bid.ipo_id, bid.client_code
        )

    async def asba_form(
        self, db: AsyncSession, bid_id: str, broker_code: str | None
    ) -> AsbaFormResponse:
        bid = await self._get_scoped(db, bid_id, broker_code)
        client = await self._clients.get_by_trading_code(db, bid.broker_code, bid.client_code)
        return AsbaFormResponse(
            application_number=bid.application_number,
            ipo_name=bid.ipo_name,
            category=bid.category,
            client_code=bid.client_code,
            client_name=bid.client_name,
            pan=bid.pan,
            mobile=client.mobile if client else None,
            email=client.email if client else None,
            dp_id=client.dp_id if client else None,
            upi_id=bid.upi_id,
            bank_name=client.bank_name if client else None,
            branch=client.branch if client else None,
            asba_account=client.asba_account if client else None,
            quantity=bid.quantity,
            price=bid.price,
            price_label="Cut-off" if bid.use_cutoff else rupees_to_display(bid.price),
            amount=bid.amount,
            amount_display=rupees_to_display(bid.amount),
            broker_code=bid.broker_code,
            application_date=bid.created_at.date().isoformat() if bid.created_at else None,
        )
