"""Cent rounding helpers"""

import math
from decimal import Decimal
from fractions import Fraction
from numbers import Real

from finmetrics.domain.exceptions import InvalidAmountError


def round_half_up(value: Fraction | int | float) -> int:
    """Round to the nearest integer, halves away from zero (unlike built-in round)"""
    value = Fraction(value)
    if value < 0:
        return -round_half_up(-value)
    return math.floor(value + Fraction(1, 2))


def to_fraction(amount: Real | Decimal, field: str = "amount") -> Fraction:
    """
    Convert a stored amount to an exact rational, rejecting bad input.

    Raises:
        InvalidAmountError: amount is not numeric, NaN, infinite or negative
    """
    if isinstance(amount, bool) or not isinstance(amount, (Real, Decimal)):
        raise InvalidAmountError(f"{field} must be a number, got {amount!r}")

    if isinstance(amount, Decimal):
        if not amount.is_finite():
            raise InvalidAmountError(f"{field} must be finite, got {amount}")
    elif not math.isfinite(amount):
        raise InvalidAmountError(f"{field} must be finite, got {amount}")

    value = Fraction(amount)
    if value < 0:
        raise InvalidAmountError(f"{field} must not be negative, got {amount}")
    return value


def percent(part: Fraction | int, whole: Fraction | int, places: int = 2) -> float:
    """part/whole as a percentage; 0.0 when whole is zero"""
    if whole == 0:
        return 0.0
    return round(float(Fraction(part) / Fraction(whole) * 100), places)
