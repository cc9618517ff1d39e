"""Debt payoff simulation for avalanche, snowball, hybrid and custom repayment orders"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple

from finmetrics.domain.exceptions import DoesNotConvergeError, InvalidAmountError, InvalidInputError
from finmetrics.domain.models import (
    Debt,
    PayoffMonth,
    PayoffResult,
    PayoffStrategy,
    StrategyComparison,
)
from finmetrics.utils.money import round_half_up, to_fraction

# 100 years; a plan that is still open by then never closes
DEFAULT_MAX_MONTHS = 1200


@dataclass
class _WorkingDebt:
    """Mutable copy of a Debt for the simulation loop"""

    debt_id: str
    balance: int
    annual_rate: Fraction
    minimum: int
    position: int
    opening: int = 0  # balance at the start of the current month, used for ordering

    @property
    def monthly_rate(self) -> Fraction:
        return self.annual_rate / 1200


def _whole_cents(amount, field: str) -> int:
    value = to_fraction(amount, field)
    if value.denominator != 1:
        raise InvalidAmountError(f"{field} must be whole cents, got {amount}")
    return int(value)


def _annual_rate(rate, field: str) -> Fraction:
    # via str so 19.99 means 19.99, not its binary float expansion
    if isinstance(rate, float) and math.isfinite(rate):
        rate = Decimal(str(rate))
    return to_fraction(rate, field)


def amortized_payment_cents(balance_cents: int, annual_rate_pct: float, term_months: int) -> int:
    """
    Level monthly payment that retires balance_cents in term_months.

    Uses the standard annuity formula, rounded up to the next cent so the
    term is never exceeded.
    """
    if term_months is None or term_months <= 0:
        raise InvalidAmountError(f"term_months must be positive, got {term_months}")

    balance = _whole_cents(balance_cents, "balance_cents")
    rate = float(_annual_rate(annual_rate_pct, "annual_rate_pct")) / 1200
    if balance == 0:
        return 0
    if rate == 0:
        return math.ceil(balance / term_months)

    payment = balance * rate / (1 - (1 + rate) ** -term_months)
    return math.ceil(round(payment, 6))


def debt_terms(debt: Debt) -> Tuple[int, Fraction, int]:
    """
    Validated (balance_cents, annual_rate_pct, monthly_payment_cents) for a debt.

    Fixed-term loans stored without a minimum pay their amortized installment.

    Raises:
        InvalidAmountError: negative or non-integer cents, bad rate
    """
    balance = _whole_cents(debt.balance_cents, f"{debt.debt_id}.balance_cents")
    rate = _annual_rate(debt.annual_rate_pct, f"{debt.debt_id}.annual_rate_pct")
    minimum = _whole_cents(debt.minimum_payment_cents, f"{debt.debt_id}.minimum_payment_cents")

    if minimum == 0 and debt.term_months:
        minimum = amortized_payment_cents(balance, debt.annual_rate_pct, debt.term_months)
    return balance, rate, minimum


def _working_copy(debts: Sequence[Debt]) -> List[_WorkingDebt]:
    seen = set()
    working = []
    for position, debt in enumerate(debts):
        if debt.debt_id in seen:
            raise InvalidInputError(f"Duplicate debt id {debt.debt_id!r}")
        seen.add(debt.debt_id)

        balance, rate, minimum = debt_terms(debt)
        working.append(
            _WorkingDebt(
                debt_id=debt.debt_id,
                balance=balance,
                annual_rate=rate,
                minimum=minimum,
                position=position,
            )
        )
    return working


def _priority_key(strategy: PayoffStrategy, priority: Sequence[str]):
    """Sort key placing the debt that receives surplus money first"""

    def avalanche(d: _WorkingDebt):
        return (-d.annual_rate, d.opening, d.position)

    def snowball(d: _WorkingDebt):
        return (d.opening, -d.annual_rate, d.position)

    def hybrid(d: _WorkingDebt):
        # rate weighted by balance; the weight doubles at $10,000 owed
        return (-d.annual_rate * (1 + Fraction(d.opening, 100) / 10000), d.position)

    if strategy is PayoffStrategy.AVALANCHE:
        return avalanche
    if strategy is PayoffStrategy.SNOWBALL:
        return snowball
    if strategy is PayoffStrategy.HYBRID:
        return hybrid

    rank = {debt_id: i for i, debt_id in enumerate(priority)}

    def custom(d: _WorkingDebt):
        return (rank.get(d.debt_id, len(rank)),) + avalanche(d)

    return custom


def simulate_payoff(
    debts: Sequence[Debt],
    extra_monthly_cents: int,
    strategy: PayoffStrategy | str = PayoffStrategy.AVALANCHE,
    *,
    priority: Optional[Sequence[str]] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> PayoffResult:
    """
    Simulate paying off debts month by month under a fixed monthly budget.

    The budget is the sum of every debt's minimum plus extra_monthly_cents and
    stays constant. Each month:
    1. Interest accrues on every open debt (balance * APR / 12, to the cent)
    2. Every open debt receives its minimum (capped at its balance)
    3. What is left of the budget goes to open debts in strategy order,
       cascading to the next debt when one reaches zero

    A retired debt's minimum therefore keeps flowing to the next debt in line.

    Ordering (balances as they stood at the start of the month):
    - avalanche: highest rate first, ties by lowest balance
    - snowball: lowest balance first, ties by highest rate
    - hybrid: highest rate * (1 + balance in dollars / 10000) first
    - custom: the given priority list of debt ids, unlisted debts after in avalanche order

    Input debts are never modified.

    Raises:
        InvalidAmountError: negative or non-integer cents, bad rates
        InvalidInputError: duplicate debt ids, custom strategy without priority
        DoesNotConvergeError: debt remains after max_months
    """
    try:
        strategy = PayoffStrategy(strategy)
    except ValueError as e:
        raise InvalidInputError(f"Unknown payoff strategy {strategy!r}") from e
    extra = _whole_cents(extra_monthly_cents, "extra_monthly_cents")

    if strategy is PayoffStrategy.CUSTOM:
        if not priority:
            raise InvalidInputError("Custom strategy requires a priority list of debt ids")
        unknown = set(priority) - {d.debt_id for d in debts}
        if unknown:
            raise InvalidInputError(f"Priority references unknown debt ids: {sorted(unknown)}")

    working = _working_copy(debts)
    key = _priority_key(strategy, priority or [])

    budget = sum(d.minimum for d in working) + extra
    open_debts = [d for d in working if d.balance > 0]

    # Debts that start at zero are retired before month 1
    payoff_order = [d.debt_id for d in working if d.balance == 0]
    payoff_month: Dict[str, int] = {debt_id: 0 for debt_id in payoff_order}

    schedule: List[PayoffMonth] = []
    total_interest = 0
    total_paid = 0
    month = 0

    while open_debts:
        if month >= max_months:
            remaining = sum(d.balance for d in open_debts)
            logging.info(
                "Payoff simulation did not converge",
                extra={"strategy": strategy.value, "max_months": max_months, "remaining_cents": remaining},
            )
            raise DoesNotConvergeError(max_months, remaining)

        month += 1

        interest = 0
        for d in open_debts:
            d.opening = d.balance
            accrued = round_half_up(d.balance * d.monthly_rate)
            d.balance += accrued
            interest += accrued

        pool = budget
        for d in open_debts:
            payment = min(d.minimum, d.balance)
            d.balance -= payment
            pool -= payment

        ordered = sorted(open_debts, key=key)
        for d in ordered:
            if pool <= 0:
                break
            payment = min(pool, d.balance)
            d.balance -= payment
            pool -= payment

        retired = [d.debt_id for d in ordered if d.balance == 0]
        for debt_id in retired:
            payoff_month[debt_id] = month
        payoff_order.extend(retired)
        open_debts = [d for d in open_debts if d.balance > 0]

        paid = budget - pool
        total_interest += interest
        total_paid += paid

        schedule.append(
            PayoffMonth(
                month=month,
                payment_cents=paid,
                interest_cents=interest,
                principal_cents=paid - interest,
                remaining_balance_cents=sum(d.balance for d in open_debts),
                balances={d.debt_id: d.balance for d in working},
                retired=retired,
            )
        )

    return PayoffResult(
        strategy=strategy,
        months=month,
        total_interest_cents=total_interest,
        total_paid_cents=total_paid,
        schedule=schedule,
        payoff_order=payoff_order,
        payoff_month=payoff_month,
    )


def compare_strategies(
    debts: Sequence[Debt],
    extra_monthly_cents: int,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> StrategyComparison:
    """Run avalanche and snowball side by side and recommend the cheaper plan"""
    avalanche = simulate_payoff(debts, extra_monthly_cents, PayoffStrategy.AVALANCHE, max_months=max_months)
    snowball = simulate_payoff(debts, extra_monthly_cents, PayoffStrategy.SNOWBALL, max_months=max_months)

    if snowball.total_interest_cents < avalanche.total_interest_cents:
        best, other = snowball, avalanche
    else:
        best, other = avalanche, snowball

    return StrategyComparison(
        avalanche=avalanche,
        snowball=snowball,
        recommended=best.strategy,
        interest_saved_cents=other.total_interest_cents - best.total_interest_cents,
        months_saved=other.months - best.months,
    )
