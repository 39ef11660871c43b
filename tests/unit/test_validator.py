"""Bid eligibility validator: pure, no store or network."""

import pytest

from src.ipo_bidding.domain.models import Accepted
from src.ipo_bidding.domain.validator import validate_bid
from src.ipo_common.errors import ValidationError
from tests.unit.factories import make_ipo


@pytest.fixture
def ipo():
    return make_ipo()


class TestConcreteScenarios:
    def test_quantity_not_multiple_of_lot(self, ipo) -> None:
        assert validate_bid(ipo, "Retail", 25, 105) == [
            ValidationError("quantity_lot_multiple", 10)
        ]

    def test_retail_over_max_lots(self, ipo) -> None:
        assert validate_bid(ipo, "Retail", 60, 105) == [
            ValidationError("retail_lot_exceeded", 5)
        ]

    def test_valid_retail_bid(self, ipo) -> None:
        result = validate_bid(ipo, "Retail", 50, 105)
        assert result == Accepted(quantity=50, price=105, amount=5250, category="Retail")


class TestIpo:
    def test_missing_ipo_is_the_only_error(self) -> None:
        assert validate_bid(None, "Bogus", -5, None) == [ValidationError("ipo_required")]


class TestQuantity:
    def test_zero_quantity(self, ipo) -> None:
        assert validate_bid(ipo, "Retail", 0, 105) == [ValidationError("quantity_positive")]

    def test_negative_quantity_reports_both_rules(self, ipo) -> None:
        result = validate_bid(ipo, "Retail", -5, 105)
        assert set(result) == {
            ValidationError("quantity_positive"),
            ValidationError("quantity_lot_multiple", 10),
        }

    @pytest.mark.parametrize("lot_size", [1, 7, 10, 50])
    @pytest.mark.parametrize("quantity", [-14, -1, 0, 1, 7, 10, 49, 50, 70, 350])
    def test_accepts_iff_positive_multiple_of_lot(self, lot_size: int, quantity: int) -> None:
        roomy = make_ipo(lot_size=lot_size, retail_max_lot=10_000, hni_max_amount=10**12)
        result = validate_bid(roomy, "HNI", quantity, 100)
        should_accept = quantity > 0 and quantity % lot_size == 0
        assert isinstance(result, Accepted) is should_accept


class TestPrice:
    def test_price_required_without_cutoff(self, ipo) -> None:
        assert validate_bid(ipo, "Retail", 50, None) == [ValidationError("price_required")]

    @pytest.mark.parametrize("price", [99, 111, 0])
    def test_price_outside_band(self, ipo, price: int) -> None:
        assert validate_bid(ipo, "Retail", 50, price) == [
            ValidationError("price_out_of_band", 100, 110)
        ]

    @pytest.mark.parametrize("price", [100, 110])
    def test_band_is_inclusive(self, ipo, price: int) -> None:
        assert isinstance(validate_bid(ipo, "Retail", 50, price), Accepted)

    @pytest.mark.parametrize("supplied", [None, 1, 105, 999])
    def test_cutoff_always_uses_band_max(self, ipo, supplied: int | None) -> None:
        result = validate_bid(ipo, "Retail", 50, supplied, use_cutoff=True)
        assert isinstance(result, Accepted)
        assert result.price == 110
        assert result.amount == 5500
        assert result.use_cutoff is True

    def test_zero_price_band(self) -> None:
        free = make_ipo(price_band_min=0, price_band_max=0)
        result = validate_bid(free, "Retail", 10, None, use_cutoff=True)
        assert result == Accepted(quantity=10, price=0, amount=0, category="Retail", use_cutoff=True)
        assert validate_bid(free, "Retail", 10, 0) == Accepted(
            quantity=10, price=0, amount=0, category="Retail"
        )


class TestCategoryLimits:
    def test_retail_exactly_at_max_lots(self, ipo) -> None:
        assert isinstance(validate_bid(ipo, "Retail", 50, 100), Accepted)

    def test_hni_not_bound_by_retail_lots(self, ipo) -> None:
        assert isinstance(validate_bid(ipo, "HNI", 60, 105), Accepted)

    def test_hni_exactly_at_max_amount(self, ipo) -> None:
        result = validate_bid(ipo, "HNI", 10_000, 100)
        assert isinstance(result, Accepted)
        assert result.amount == 1_000_000

    def test_hni_over_max_amount(self, ipo) -> None:
        assert validate_bid(ipo, "HNI", 10_000, 110) == [
            ValidationError("hni_amount_exceeded", 1_000_000)
        ]

    def test_hni_amount_uses_cutoff_price(self, ipo) -> None:
        # 10_000 x 100 fits, but cut-off prices at 110
        assert validate_bid(ipo, "HNI", 10_000, 100, use_cutoff=True) == [
            ValidationError("hni_amount_exceeded", 1_000_000)
        ]

    def test_unknown_category(self, ipo) -> None:
        assert validate_bid(ipo, "NRI", 50, 105) == [ValidationError("category_invalid")]


class TestAllViolationsReported:
    def test_field_errors_come_back_together(self, ipo) -> None:
        result = validate_bid(ipo, "Retail", 65, 200)
        assert set(result) == {
            ValidationError("quantity_lot_multiple", 10),
            ValidationError("retail_lot_exceeded", 5),
            ValidationError("price_out_of_band", 100, 110),
        }

    def test_accepted_lots_never_exceed_retail_max(self, ipo) -> None:
        for quantity in range(10, 200, 10):
            result = validate_bid(ipo, "Retail", quantity, 105)
            if isinstance(result, Accepted):
                assert result.quantity // ipo.lot_size <= ipo.retail_max_lot
