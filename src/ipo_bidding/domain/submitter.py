"""Batch bid submitter.

One create per selected client, run in order on the caller's session. Each
create runs inside a savepoint (see BidRepository.create_bid) and is
committed on success, so a failed client never rolls back another client's
bid. Failures are collected into the report, never raised.

Cancellation: when the surrounding task is cancelled mid-batch, clients not
yet attempted are recorded as ``Failed("interrupted")``, the report is flagged
and the CancelledError propagates. Bids committed before that point stay.
Pass your own ``report`` to keep hold of it across the cancellation.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ipo_bidding.domain.models import (
    BatchReport,
    BidInput,
    BidTemplate,
    Created,
    Failed,
    Outcome,
)
from src.ipo_bidding.domain.repository import BidRepositoryProtocol
from src.ipo_common.errors import (
    ApplicationNumberConflictError,
    ValidationError,
    WriteError,
)
from src.ipo_common.id_generator import generate_application_number
from src.ipo_registry.domain.models import Client

logger = logging.getLogger(__name__)

INTERRUPTED = "interrupted"


def build_bid_input(
    template: BidTemplate, client: Client, broker_code: str, application_number: str
) -> BidInput:
    return BidInput(
        ipo_id=template.ipo_id,
        ipo_name=template.ipo_name,
        client_code=client.trading_code,
        client_name=client.client_name,
        pan=client.pan,
        upi_id=client.upi_handle,
        quantity=template.quantity,
        price=template.price,
        use_cutoff=template.use_cutoff,
        amount=template.amount,
        category=template.category,
        application_number=application_number,
        broker_code=broker_code,
        group_code=client.group_code,
    )


async def _submit_one(
    template: BidTemplate,
    client: Client,
    broker_code: str,
    repo: BidRepositoryProtocol,
    db: AsyncSession,
    next_application_number: Callable[[], str],
    attempts: int,
) -> Outcome:
    code = client.trading_code
    last_error: WriteError | None = None

    for attempt in range(1, attempts + 1):
        bid_input = build_bid_input(template, client, broker_code, next_application_number())
        try:
            bid = await repo.create_bid(db, bid_input)
        except ApplicationNumberConflictError as e:
            # Fresh number on the next pass
            logger.info(
                "Application number collision for client=%s (attempt %d/%d)",
                code, attempt, attempts,
            )
            last_error = e
            continue
        except WriteError as e:
            logger.warning("Bid create failed: client=%s ipo=%s: %s", code, template.ipo_id, e.message)
            return Failed(code, e.message, e.code, client.id)
        except SQLAlchemyError as e:
            err = WriteError(str(e))
            logger.warning("Bid create failed: client=%s ipo=%s: %s", code, template.ipo_id, err.message)
            return Failed(code, err.message, err.code, client.id)

        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            err = WriteError(f"commit failed: {e}")
            logger.warning("Bid commit failed: client=%s ipo=%s: %s", code, template.ipo_id, e)
            return Failed(code, err.message, err.code, client.id)
        return Created(code, bid, client.id)

    assert last_error is not None
    logger.warning(
        "Bid create failed: client=%s ipo=%s: no free application number after %d attempts",
        code, template.ipo_id, attempts,
    )
    return Failed(code, last_error.message, last_error.code, client.id)


async def submit_batch(
    template: BidTemplate,
    clients: Sequence[Client],
    broker_code: str,
    repo: BidRepositoryProtocol,
    db: AsyncSession,
    *,
    report: BatchReport | None = None,
    next_application_number: Callable[[], str] = generate_application_number,
    attempts: int | None = None,
) -> BatchReport:
    """Create one bid per client and report each client's outcome.

    Raises ValidationError("no_clients_selected") before any write when
    ``clients`` is empty, and ValueError when ``attempts`` is below 1.
    """
    if not clients:
        raise ValidationError("no_clients_selected")

    max_attempts = attempts if attempts is not None else settings.APPLICATION_NUMBER_RETRIES
    if max_attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {max_attempts}")

    report = report if report is not None else BatchReport()
    done = 0
    try:
        for client in clients:
            outcome = await _submit_one(
                template, client, broker_code, repo, db,
                next_application_number, max_attempts,
            )
            report.outcomes.append(outcome)
            done += 1
    except asyncio.CancelledError:
        report.interrupted = True
        report.outcomes.extend(
            Failed(c.trading_code, INTERRUPTED, client_id=c.id) for c in clients[done:]
        )
        logger.warning(
            "Bid batch interrupted: ipo=%s broker=%s created=%d not_attempted=%d",
            template.ipo_id, broker_code, len(report.created), len(clients) - done,
        )
        raise

    logger.info(
        "Bid batch done: ipo=%s broker=%s created=%d failed=%d status=%s",
        template.ipo_id, broker_code, len(report.created), len(report.failed),
        report.status.value,
    )
    return report
