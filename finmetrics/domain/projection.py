"""Cash-flow forecasting: linear trend projection over monthly totals"""

from collections import defaultdict
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence

from finmetrics.domain.exceptions import InvalidSeriesError
from finmetrics.domain.models import (
    CashflowEntry,
    CashflowProjection,
    MonthOverMonth,
    RecurringAmount,
    TimeSeriesPoint,
    TrendPoint,
)
from finmetrics.domain.normalizer import is_recurring, to_monthly_equivalent
from finmetrics.utils.date_utils import generate_period_range, month_index, period_of
from finmetrics.utils.money import round_half_up


def linear_projection(values: Sequence[int]) -> Fraction:
    """
    Ordinary least squares of values against index 0..n-1, evaluated at n.

    - Empty input projects 0 (no history yet)
    - A single value has no slope; it is projected unchanged
    - Negative projections are floored at 0
    """
    n = len(values)
    if n == 0:
        return Fraction(0)
    if n == 1:
        return max(Fraction(0), Fraction(values[0]))

    sum_x = n * (n - 1) // 2
    sum_xx = (n - 1) * n * (2 * n - 1) // 6
    sum_y = sum(values)
    sum_xy = sum(i * v for i, v in enumerate(values))

    slope = Fraction(n * sum_xy - sum_x * sum_y, n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n

    return max(Fraction(0), slope * n + intercept)


def validate_series(series: Sequence[TimeSeriesPoint]) -> None:
    """
    Raises:
        InvalidSeriesError: periods malformed, out of order, duplicated or with gaps
    """
    previous: Optional[int] = None
    for point in series:
        try:
            index = month_index(point.period)
        except ValueError as e:
            raise InvalidSeriesError(str(e)) from e

        if previous is not None and index != previous + 1:
            raise InvalidSeriesError(
                f"Periods must be ascending, unique and contiguous; got {point.period} after index {previous}"
            )
        previous = index


def _pct_change(current: int, prior: int) -> float:
    # Prior month of 0 reports no change rather than infinity
    if prior <= 0:
        return 0.0
    return round((current - prior) / prior * 100, 1)


def month_over_month(series: Sequence[TimeSeriesPoint]) -> MonthOverMonth:
    """Percentage change between the two most recent months of the series"""
    if len(series) < 2:
        return MonthOverMonth()

    previous, current = series[-2], series[-1]
    return MonthOverMonth(
        income_pct=_pct_change(current.income_cents, previous.income_cents),
        expenses_pct=_pct_change(current.expense_cents, previous.expense_cents),
    )


def project_next(
    series: Sequence[TimeSeriesPoint],
    recurring_income_cents: Optional[int] = None,
) -> CashflowProjection:
    """
    Forecast next month's income, expenses, net cash flow and savings rate.

    Args:
        series: Monthly totals, ascending and contiguous
        recurring_income_cents: Known monthly recurring income. When given and
            positive it replaces the income trend; expenses are always trended.

    Returns:
        CashflowProjection; an empty series yields zeros with insufficient_data set
    """
    validate_series(series)

    trend = [
        TrendPoint(
            period=p.period,
            income_cents=p.income_cents,
            expense_cents=p.expense_cents,
            net_cents=p.income_cents - p.expense_cents,
        )
        for p in series
    ]

    if recurring_income_cents is not None and recurring_income_cents > 0:
        projected_income = recurring_income_cents
    else:
        projected_income = round_half_up(linear_projection([p.income_cents for p in series]))
    projected_expenses = round_half_up(linear_projection([p.expense_cents for p in series]))

    net = projected_income - projected_expenses
    savings_rate = round(net / projected_income, 4) if projected_income > 0 else 0.0

    return CashflowProjection(
        projected_income_cents=projected_income,
        projected_expenses_cents=projected_expenses,
        net_cashflow_cents=net,
        savings_rate=savings_rate,
        month_over_month=month_over_month(series),
        monthly_trend=trend,
        insufficient_data=not series,
    )


def build_monthly_series(
    entries: Iterable[CashflowEntry],
    recurring_incomes: Iterable[RecurringAmount] = (),
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> List[TimeSeriesPoint]:
    """
    Group income/expense rows into contiguous calendar-month totals.

    Months with no rows inside [start, end] appear with zero totals. Each
    recurring income's monthly equivalent is added to every month; one-time
    incomes are left out.

    Raises:
        InvalidSeriesError: start or end is not a YYYY-MM period
    """
    income_by_period: Dict[str, int] = defaultdict(int)
    expense_by_period: Dict[str, int] = defaultdict(int)

    for entry in entries:
        period = period_of(entry.day)
        if entry.is_income:
            income_by_period[period] += entry.amount_cents
        else:
            expense_by_period[period] += entry.amount_cents

    seen = sorted(set(income_by_period) | set(expense_by_period), key=month_index)
    start = start or (seen[0] if seen else None)
    end = end or (seen[-1] if seen else None)
    if start is None or end is None:
        return []

    try:
        periods = generate_period_range(start, end)
    except ValueError as e:
        raise InvalidSeriesError(str(e)) from e

    recurring = sum(
        (to_monthly_equivalent(r.amount_cents, r.frequency) for r in recurring_incomes if is_recurring(r.frequency)),
        Fraction(0),
    )
    recurring_cents = round_half_up(recurring)

    return [
        TimeSeriesPoint(
            period=period,
            income_cents=income_by_period.get(period, 0) + recurring_cents,
            expense_cents=expense_by_period.get(period, 0),
        )
        for period in periods
    ]
