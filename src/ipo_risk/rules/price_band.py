from src.ipo_common.errors import ValidationError


def normalize_price(price: int | None, band_max: int, use_cutoff: bool) -> int | None:
    """Cut-off bids always take the upper end of the band; a supplied price is ignored."""
    if use_cutoff:
        return band_max
    return price


def check_price_band(
    price: int | None, band_min: int, band_max: int
) -> ValidationError | None:
    """Inclusive on both ends. ``price`` must already be normalized."""
    if price is None:
        return ValidationError("price_required")
    if not (band_min <= price <= band_max):
        return ValidationError("price_out_of_band", band_min, band_max)
    return None
