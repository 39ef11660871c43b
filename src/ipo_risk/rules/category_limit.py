from src.ipo_common.enums import BidCategory
from src.ipo_common.errors import ValidationError
from src.ipo_common.rupees import bid_amount

_CATEGORIES = {c.value for c in BidCategory}


def check_category(category: str) -> ValidationError | None:
    if category not in _CATEGORIES:
        return ValidationError("category_invalid")
    return None


def check_retail_lots(
    quantity: int, lot_size: int, retail_max_lot: int
) -> ValidationError | None:
    # quantity / lot_size <= retail_max_lot, kept in integers
    if quantity > retail_max_lot * lot_size:
        return ValidationError("retail_lot_exceeded", retail_max_lot)
    return None


def check_hni_amount(
    quantity: int, price: int | None, hni_max_amount: int
) -> ValidationError | None:
    """Skipped while the price is unknown; that case is reported as price_required."""
    if price is None:
        return None
    if bid_amount(quantity, price) > hni_max_amount:
        return ValidationError("hni_amount_exceeded", hni_max_amount)
    return None
