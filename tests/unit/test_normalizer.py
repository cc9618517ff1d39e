"""Unit tests for monthly-equivalent normalization"""

import logging
import random
import pytest
from decimal import Decimal
from fractions import Fraction
from finmetrics.domain.models import RecurrenceFrequency
from finmetrics.domain.normalizer import (
    is_recurring,
    monthly_recurring_total,
    parse_frequency,
    to_monthly_cents,
    to_monthly_equivalent,
)
from finmetrics.domain.exceptions import InvalidAmountError


@pytest.mark.parametrize(
    "frequency, expected_cents",
    [
        (RecurrenceFrequency.DAILY, 304_200),
        (RecurrenceFrequency.WEEKLY, 43_300),
        (RecurrenceFrequency.BI_WEEKLY, 21_700),
        (RecurrenceFrequency.MONTHLY, 10_000),
        (RecurrenceFrequency.QUARTERLY, 3_333),
        (RecurrenceFrequency.SEMI_ANNUAL, 1_667),
        (RecurrenceFrequency.ANNUAL, 833),
        (RecurrenceFrequency.ONE_TIME, 0),
    ],
)
def test_to_monthly_cents_multiplier_table(frequency, expected_cents):
    """$100 per period converted with the fixed multiplier table"""
    assert to_monthly_cents(10_000, frequency) == expected_cents


def test_to_monthly_equivalent_is_exact():
    """Quarterly and annual divisions keep fractional cents until presentation"""
    assert to_monthly_equivalent(100, "quarterly") == Fraction(100, 3)
    assert to_monthly_equivalent(120_000, "annual") == Fraction(10_000)


@pytest.mark.parametrize("frequency", [f for f in RecurrenceFrequency if f is not RecurrenceFrequency.ONE_TIME])
@pytest.mark.parametrize("seed", range(5))
def test_to_monthly_equivalent_is_linear(frequency, seed):
    """Doubling the amount doubles the monthly equivalent exactly"""
    amount = random.Random(seed).randint(1, 10_000_000)
    assert to_monthly_equivalent(2 * amount, frequency) == 2 * to_monthly_equivalent(amount, frequency)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("annually", RecurrenceFrequency.ANNUAL),
        ("Yearly", RecurrenceFrequency.ANNUAL),
        ("biweekly", RecurrenceFrequency.BI_WEEKLY),
        ("bi-weekly", RecurrenceFrequency.BI_WEEKLY),
        ("semiannually", RecurrenceFrequency.SEMI_ANNUAL),
        ("bi-annual", RecurrenceFrequency.SEMI_ANNUAL),
        ("semi_annual", RecurrenceFrequency.SEMI_ANNUAL),
        ("none", RecurrenceFrequency.ONE_TIME),
        ("one-time", RecurrenceFrequency.ONE_TIME),
        (" Monthly ", RecurrenceFrequency.MONTHLY),
        (RecurrenceFrequency.QUARTERLY, RecurrenceFrequency.QUARTERLY),
    ],
)
def test_parse_frequency_accepts_stored_spellings(raw, expected):
    assert parse_frequency(raw) is expected


def test_unknown_frequency_treated_as_monthly_with_warning(caplog):
    """Unrecognized tags fall back to monthly and are logged, not raised"""
    with caplog.at_level(logging.WARNING):
        assert parse_frequency("fortnightly-ish") is RecurrenceFrequency.MONTHLY
        assert to_monthly_cents(5_000, "every-blue-moon") == 5_000

    assert any("Unknown recurrence frequency" in r.getMessage() for r in caplog.records)


def test_missing_frequency_treated_as_monthly():
    assert parse_frequency(None) is RecurrenceFrequency.MONTHLY


@pytest.mark.parametrize("raw", [5, 2.5, ""])
def test_non_string_frequency_treated_as_monthly(raw):
    assert parse_frequency(raw) is RecurrenceFrequency.MONTHLY
    assert to_monthly_cents(5_000, raw) == 5_000


@pytest.mark.parametrize("amount", [-1, float("nan"), float("inf"), float("-inf"), Decimal("NaN"), "100", None, True])
def test_invalid_amount_raises(amount):
    with pytest.raises(InvalidAmountError):
        to_monthly_equivalent(amount, "monthly")


def test_decimal_amounts_accepted():
    assert to_monthly_cents(Decimal("1200.00"), "annual") == 100


def test_is_recurring():
    assert is_recurring("weekly") is True
    assert is_recurring("none") is False
    assert is_recurring(RecurrenceFrequency.ONE_TIME) is False


def test_monthly_recurring_total_rounds_once():
    """Three quarterly $0.01 amounts sum to 1 cent, not 3 x round(0.33) = 0"""
    items = [(1, "quarterly"), (1, "quarterly"), (1, "quarterly")]
    assert monthly_recurring_total(items) == 1


def test_monthly_recurring_total_skips_one_time():
    items = [(400_000, "monthly"), (1_000_000, "one_time"), (120_000, "annual")]
    assert monthly_recurring_total(items) == 410_000
