"""Decimal helpers shared by the tax engine."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Amount = Union[Decimal, int, float, str]
"""Any numeric input accepted at the engine boundary."""

ZERO = Decimal("0")
CENT = Decimal("0.01")
DOLLAR = Decimal("1")


def to_decimal(value: Amount | None) -> Decimal:
    """Convert a caller-supplied amount to Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. ``None`` and non-finite values
    (infinity, NaN) are treated as zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = str(value)
    amount = value if isinstance(value, Decimal) else Decimal(value)
    # inf and nan cannot be rounded to cents
    if not amount.is_finite():
        return ZERO
    return amount


def round_cents(value: Decimal) -> Decimal:
    """Round half-up to two decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_whole_dollars(value: Decimal) -> Decimal:
    """Round half-up to whole dollars."""
    return value.quantize(DOLLAR, rounding=ROUND_HALF_UP)
