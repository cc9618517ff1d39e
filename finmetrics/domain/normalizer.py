"""Convert recurring amounts to their monthly equivalent"""

import logging
from decimal import Decimal
from fractions import Fraction
from numbers import Real
from typing import Dict, Iterable, Tuple

from finmetrics.domain.models import RecurrenceFrequency
from finmetrics.utils.money import round_half_up, to_fraction

# Per-period amount → average per calendar month.
# Rational so that normalizing 2x gives exactly twice normalizing x.
MONTHLY_MULTIPLIERS: Dict[RecurrenceFrequency, Fraction] = {
    RecurrenceFrequency.DAILY: Fraction("30.42"),
    RecurrenceFrequency.WEEKLY: Fraction("4.33"),
    RecurrenceFrequency.BI_WEEKLY: Fraction("2.17"),
    RecurrenceFrequency.MONTHLY: Fraction(1),
    RecurrenceFrequency.QUARTERLY: Fraction(1, 3),
    RecurrenceFrequency.SEMI_ANNUAL: Fraction(1, 6),
    RecurrenceFrequency.ANNUAL: Fraction(1, 12),
    RecurrenceFrequency.ONE_TIME: Fraction(0),
}

# Spellings found in stored rows (income, bills and subscription tables differ)
_ALIASES: Dict[str, RecurrenceFrequency] = {
    "day": RecurrenceFrequency.DAILY,
    "week": RecurrenceFrequency.WEEKLY,
    "biweekly": RecurrenceFrequency.BI_WEEKLY,
    "fortnightly": RecurrenceFrequency.BI_WEEKLY,
    "month": RecurrenceFrequency.MONTHLY,
    "quarter": RecurrenceFrequency.QUARTERLY,
    "semiannual": RecurrenceFrequency.SEMI_ANNUAL,
    "semiannually": RecurrenceFrequency.SEMI_ANNUAL,
    "semi_annually": RecurrenceFrequency.SEMI_ANNUAL,
    "bi_annual": RecurrenceFrequency.SEMI_ANNUAL,
    "biannual": RecurrenceFrequency.SEMI_ANNUAL,
    "annually": RecurrenceFrequency.ANNUAL,
    "yearly": RecurrenceFrequency.ANNUAL,
    "year": RecurrenceFrequency.ANNUAL,
    "none": RecurrenceFrequency.ONE_TIME,
    "once": RecurrenceFrequency.ONE_TIME,
    "onetime": RecurrenceFrequency.ONE_TIME,
}


def parse_frequency(raw: RecurrenceFrequency | str | None) -> RecurrenceFrequency:
    """
    Map a stored recurrence tag to a RecurrenceFrequency.

    Unrecognized tags (including None) are treated as monthly and logged at
    WARNING level. Rows written before the frequency enum was tightened still
    have to produce a number.
    """
    if isinstance(raw, RecurrenceFrequency):
        return raw

    key = ("" if raw is None else str(raw)).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return RecurrenceFrequency(key)
    except ValueError:
        pass

    if key in _ALIASES:
        return _ALIASES[key]

    logging.warning(
        "Unknown recurrence frequency, treating as monthly",
        extra={"frequency": raw, "fallback": RecurrenceFrequency.MONTHLY.value},
    )
    return RecurrenceFrequency.MONTHLY


def is_recurring(frequency: RecurrenceFrequency | str | None) -> bool:
    return parse_frequency(frequency) is not RecurrenceFrequency.ONE_TIME


def to_monthly_equivalent(
    amount: Real | Decimal, frequency: RecurrenceFrequency | str | None
) -> Fraction:
    """
    Exact monthly equivalent of a per-period amount, in the amount's unit.

    One-time amounts contribute nothing to recurring aggregates and return 0.

    Raises:
        InvalidAmountError: amount is negative, NaN, infinite or not numeric

    Example:
        to_monthly_equivalent(120000, "annual") == Fraction(10000)
    """
    value = to_fraction(amount)
    return value * MONTHLY_MULTIPLIERS[parse_frequency(frequency)]


def to_monthly_cents(amount: Real | Decimal, frequency: RecurrenceFrequency | str | None) -> int:
    """Monthly equivalent rounded half-up to whole cents"""
    return round_half_up(to_monthly_equivalent(amount, frequency))


def monthly_recurring_total(
    items: Iterable[Tuple[Real | Decimal, RecurrenceFrequency | str | None]],
) -> int:
    """
    Sum of monthly equivalents for (amount, frequency) pairs, in cents.

    One-time items are skipped. Rounding happens once, on the total, so no
    cents are lost across many small normalized amounts.
    """
    total = Fraction(0)
    for amount, frequency in items:
        if not is_recurring(frequency):
            continue
        total += to_monthly_equivalent(amount, frequency)
    return round_half_up(total)
