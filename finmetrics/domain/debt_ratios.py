"""Debt-to-income ratio and lender risk bands"""

from typing import Sequence

from finmetrics.domain.amortization import debt_terms
from finmetrics.domain.exceptions import InvalidAmountError
from finmetrics.domain.models import Debt, DebtRiskLevel, DebtToIncome
from finmetrics.utils.money import percent

# Most lenders look for 36% or less; 43% is the usual qualified-mortgage ceiling
TARGET_RATIO_PCT = 36.0


def classify_debt_to_income(ratio_pct: float) -> DebtRiskLevel:
    if ratio_pct > 50:
        return DebtRiskLevel.SEVERE
    elif ratio_pct > 43:
        return DebtRiskLevel.HIGH
    elif ratio_pct > TARGET_RATIO_PCT:
        return DebtRiskLevel.MODERATE
    else:
        return DebtRiskLevel.LOW


def debt_to_income(debts: Sequence[Debt], monthly_income_cents: int) -> DebtToIncome:
    """
    Monthly minimum debt payments as a percentage of gross monthly income.

    Payments are the same ones the payoff simulation uses: the stated
    minimum, or the amortized installment for fixed-term loans stored
    without one.

    Zero income yields a 0% ratio flagged as insufficient_data, since the
    ratio is meaningless without income on record.

    Raises:
        InvalidAmountError: negative income or invalid debt amounts
    """
    if monthly_income_cents < 0:
        raise InvalidAmountError(f"monthly_income_cents must not be negative, got {monthly_income_cents}")

    terms = [debt_terms(d) for d in debts]
    payments = sum(minimum for _, _, minimum in terms)
    total_debt = sum(balance for balance, _, _ in terms)

    if monthly_income_cents == 0:
        return DebtToIncome(
            ratio_pct=0.0,
            risk_level=DebtRiskLevel.LOW,
            monthly_debt_payments_cents=payments,
            total_debt_cents=total_debt,
            monthly_income_cents=0,
            insufficient_data=True,
        )

    ratio = percent(payments, monthly_income_cents)
    return DebtToIncome(
        ratio_pct=ratio,
        risk_level=classify_debt_to_income(ratio),
        monthly_debt_payments_cents=payments,
        total_debt_cents=total_debt,
        monthly_income_cents=monthly_income_cents,
    )
