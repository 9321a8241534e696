"""Tests for Decimal helpers."""

from decimal import Decimal

import pytest

from freefile.tax.money import round_cents, round_whole_dollars, to_decimal


class TestToDecimal:
    """Tests for to_decimal."""

    def test_float_goes_through_str(self) -> None:
        """0.1 keeps its short decimal form."""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_none_is_zero(self) -> None:
        """Missing amounts count as zero."""
        assert to_decimal(None) == Decimal("0")

    @pytest.mark.parametrize(
        "value",
        [float("inf"), float("-inf"), float("nan"), "Infinity", Decimal("NaN")],
    )
    def test_non_finite_is_zero(self, value: float | str | Decimal) -> None:
        """Infinity and NaN cannot be rounded, so they count as zero."""
        assert to_decimal(value) == Decimal("0")


class TestRounding:
    """Tests for half-up rounding."""

    def test_cents_round_half_up(self) -> None:
        """Half a cent rounds away from zero."""
        assert round_cents(Decimal("1.005")) == Decimal("1.01")

    def test_whole_dollars_round_half_up(self) -> None:
        """Fifty cents rounds up."""
        assert round_whole_dollars(Decimal("2.50")) == Decimal("3")
