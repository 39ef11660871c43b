from src.ipo_common.errors import ValidationError


def check_quantity_positive(quantity: int) -> ValidationError | None:
    if quantity <= 0:
        return ValidationError("quantity_positive")
    return None


def check_lot_multiple(quantity: int, lot_size: int) -> ValidationError | None:
    """lot_size > 0 is guaranteed by the IPO master; zero is a multiple."""
    if quantity % lot_size != 0:
        return ValidationError("quantity_lot_multiple", lot_size)
    return None
