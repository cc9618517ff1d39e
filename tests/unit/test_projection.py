"""Unit tests for cash-flow projection"""

import pytest
from datetime import date
from fractions import Fraction
from finmetrics.domain.models import CashflowEntry, RecurringAmount, TimeSeriesPoint
from finmetrics.domain.projection import (
    build_monthly_series,
    linear_projection,
    month_over_month,
    project_next,
)
from finmetrics.domain.exceptions import InvalidSeriesError


def test_linear_projection_exact_on_linear_series():
    """Income rising exactly $100/month predicts the next step with no residual"""
    values = [100_000, 110_000, 120_000, 130_000, 140_000, 150_000]
    assert linear_projection(values) == 160_000


def test_linear_projection_empty_and_single():
    assert linear_projection([]) == 0
    assert linear_projection([42_000]) == 42_000


def test_linear_projection_floors_negative_trend():
    """Steeply falling values would project below zero"""
    assert linear_projection([30_000, 15_000, 0]) == 0


def test_linear_projection_noisy_series():
    # slope 0.5, intercept 1.5 -> 1.5 + 0.5 * 3
    assert linear_projection([1, 3, 2]) == Fraction(3)


def test_project_next_linear_series(linear_series):
    projection = project_next(linear_series)

    assert projection.projected_income_cents == 160_000
    assert projection.projected_expenses_cents == 80_000
    assert projection.net_cashflow_cents == 80_000
    assert projection.savings_rate == 0.5
    assert projection.insufficient_data is False
    assert [p.period for p in projection.monthly_trend] == [f"2024-0{m}" for m in range(1, 7)]
    assert projection.monthly_trend[0].net_cents == 20_000


def test_project_next_empty_series_is_not_an_error():
    projection = project_next([])

    assert projection.projected_income_cents == 0
    assert projection.projected_expenses_cents == 0
    assert projection.net_cashflow_cents == 0
    assert projection.savings_rate == 0.0
    assert projection.monthly_trend == []
    assert projection.insufficient_data is True


def test_project_next_single_point_projects_unchanged():
    projection = project_next([TimeSeriesPoint("2024-05", 300_000, 250_000)])

    assert projection.projected_income_cents == 300_000
    assert projection.projected_expenses_cents == 250_000
    assert projection.month_over_month.income_pct == 0.0


def test_project_next_zero_income_savings_rate_zero():
    series = [TimeSeriesPoint("2024-01", 0, 50_000), TimeSeriesPoint("2024-02", 0, 60_000)]
    projection = project_next(series)

    assert projection.projected_income_cents == 0
    assert projection.net_cashflow_cents == -70_000
    assert projection.savings_rate == 0.0


def test_project_next_recurring_income_overrides_trend(linear_series):
    projection = project_next(linear_series, recurring_income_cents=400_000)

    assert projection.projected_income_cents == 400_000
    assert projection.projected_expenses_cents == 80_000
    assert projection.savings_rate == 0.8


@pytest.mark.parametrize(
    "periods",
    [
        ["2024-01", "2024-03"],  # gap
        ["2024-02", "2024-01"],  # descending
        ["2024-01", "2024-01"],  # duplicate
        ["2024-13"],  # malformed
    ],
)
def test_project_next_rejects_bad_periods(periods):
    series = [TimeSeriesPoint(p, 1_000, 1_000) for p in periods]
    with pytest.raises(InvalidSeriesError):
        project_next(series)


def test_project_next_accepts_year_boundary():
    series = [TimeSeriesPoint("2023-12", 1_000, 500), TimeSeriesPoint("2024-01", 2_000, 500)]
    assert project_next(series).projected_income_cents == 3_000


def test_month_over_month_change():
    series = [TimeSeriesPoint("2024-01", 200_000, 100_000), TimeSeriesPoint("2024-02", 250_000, 90_000)]
    change = month_over_month(series)

    assert change.income_pct == 25.0
    assert change.expenses_pct == -10.0


def test_month_over_month_zero_prior_reports_zero():
    series = [TimeSeriesPoint("2024-01", 0, 0), TimeSeriesPoint("2024-02", 250_000, 90_000)]
    change = month_over_month(series)

    assert change.income_pct == 0.0
    assert change.expenses_pct == 0.0


def test_build_monthly_series_groups_and_fills_gaps():
    entries = [
        CashflowEntry(date(2024, 1, 3), 300_000, True),
        CashflowEntry(date(2024, 1, 15), 4_500, False),
        CashflowEntry(date(2024, 1, 20), 5_500, False),
        CashflowEntry(date(2024, 3, 2), 12_000, False),
    ]

    series = build_monthly_series(entries)

    assert [p.period for p in series] == ["2024-01", "2024-02", "2024-03"]
    assert series[0] == TimeSeriesPoint("2024-01", 300_000, 10_000)
    assert series[1] == TimeSeriesPoint("2024-02", 0, 0)
    assert series[2] == TimeSeriesPoint("2024-03", 0, 12_000)


def test_build_monthly_series_adds_recurring_income():
    entries = [CashflowEntry(date(2024, 1, 10), 10_000, False), CashflowEntry(date(2024, 2, 10), 10_000, False)]
    recurring = [
        RecurringAmount(100_000, "weekly", "Paycheck"),
        RecurringAmount(500_000, "one_time", "Bonus"),
    ]

    series = build_monthly_series(entries, recurring)

    assert [p.income_cents for p in series] == [433_000, 433_000]


def test_build_monthly_series_explicit_range():
    series = build_monthly_series([], start="2024-11", end="2025-02")

    assert [p.period for p in series] == ["2024-11", "2024-12", "2025-01", "2025-02"]
    assert all(p.income_cents == 0 and p.expense_cents == 0 for p in series)


def test_build_monthly_series_empty():
    assert build_monthly_series([]) == []


@pytest.mark.parametrize("start, end", [("2024-13", "2025-02"), ("2024-11", "Feb 2025"), ("2024-1", None)])
def test_build_monthly_series_rejects_malformed_range(start, end):
    entries = [CashflowEntry(day=date(2024, 12, 5), amount_cents=1_000, is_income=True)]

    with pytest.raises(InvalidSeriesError):
        build_monthly_series(entries, start=start, end=end)
