from collections.abc import Iterable, Sequence

from src.ipo_bidding.domain.models import Bid
from src.ipo_registry.domain.models import Client


def compute_eligible_clients(
    clients: Sequence[Client], existing_bids: Iterable[Bid]
) -> list[Client]:
    """Clients with no bid among ``existing_bids``, in input order.

    ``existing_bids`` must already be scoped to one IPO by the caller.
    """
    already_bid = {bid.client_code for bid in existing_bids}
    if not already_bid:
        return list(clients)
    return [c for c in clients if c.trading_code not in already_bid]
