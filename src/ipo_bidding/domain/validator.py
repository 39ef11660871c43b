"""Bid eligibility validator.

Every rule runs independently and all violations come back together, so a
form can mark each offending field at once. No I/O: the IPO is passed in.
"""

from src.ipo_bidding.domain.models import Accepted
from src.ipo_catalog.domain.models import Ipo
from src.ipo_common.enums import BidCategory
from src.ipo_common.errors import ValidationError
from src.ipo_common.rupees import bid_amount
from src.ipo_risk.rules.category_limit import (
    check_category,
    check_hni_amount,
    check_retail_lots,
)
from src.ipo_risk.rules.price_band import check_price_band, normalize_price
from src.ipo_risk.rules.quantity import check_lot_multiple, check_quantity_positive


def validate_bid(
    ipo: Ipo | None,
    category: str,
    quantity: int,
    price: int | None,
    use_cutoff: bool = False,
) -> Accepted | list[ValidationError]:
    """Return ``Accepted`` or the non-empty list of violations."""
    if ipo is None:
        return [ValidationError("ipo_required")]

    effective_price = normalize_price(price, ipo.price_band_max, use_cutoff)

    checks = [
        check_category(category),
        check_quantity_positive(quantity),
        check_lot_multiple(quantity, ipo.lot_size),
        check_price_band(effective_price, ipo.price_band_min, ipo.price_band_max),
    ]
    if category == BidCategory.RETAIL.value:
        checks.append(check_retail_lots(quantity, ipo.lot_size, ipo.retail_max_lot))
    elif category == BidCategory.HNI.value:
        checks.append(check_hni_amount(quantity, effective_price, ipo.hni_max_amount))

    violations = [v for v in checks if v is not None]
    if violations:
        return violations

    assert effective_price is not None  # price_required would have fired
    return Accepted(
        quantity=quantity,
        price=effective_price,
        amount=bid_amount(quantity, effective_price),
        category=category,
        use_cutoff=use_cutoff,
    )
