"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from finmetrics.domain.models import (
    DebtRiskLevel,
    DiversificationInsight,
    PayoffStrategy,
    ValueCategory,
)

PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


# Cash flow


class TimeSeriesPointSchema(BaseModel):
    period: str = Field(..., pattern=PERIOD_PATTERN, description="Calendar month, YYYY-MM")
    income_cents: int = Field(..., ge=0)
    expense_cents: int = Field(..., ge=0)


class RecurringAmountSchema(BaseModel):
    amount_cents: int = Field(..., ge=0)
    frequency: str = Field("monthly", description="daily, weekly, bi_weekly, monthly, quarterly, semi_annual, annual, one_time")
    label: str = ""


class CashflowProjectionRequest(BaseModel):
    """Request body for POST /v1/cashflow/projection"""

    series: List[TimeSeriesPointSchema] = Field(default_factory=list)
    recurring_incomes: List[RecurringAmountSchema] = Field(default_factory=list)


class TrendPointSchema(BaseModel):
    period: str
    income_cents: int
    expense_cents: int
    net_cents: int


class MonthOverMonthSchema(BaseModel):
    income_pct: float
    expenses_pct: float


class CashflowProjectionResponse(BaseModel):
    projected_income_cents: int
    projected_expenses_cents: int
    net_cashflow_cents: int
    savings_rate: float
    month_over_month: MonthOverMonthSchema
    monthly_trend: List[TrendPointSchema]
    insufficient_data: bool


# Diversification


class IncomeSourceSchema(BaseModel):
    category: Optional[str] = None
    amount_cents: int = Field(..., ge=0)
    frequency: str = "monthly"


class DiversificationRequest(BaseModel):
    """Request body for POST /v1/income/diversification"""

    sources: List[IncomeSourceSchema] = Field(default_factory=list)
    user_id: Optional[str] = Field(None, min_length=1, description="Save a snapshot of the score for this user")


class AllocationSchema(BaseModel):
    category: str
    amount_cents: int
    percentage: float


class DiversificationResponse(BaseModel):
    score: int
    insight: DiversificationInsight
    hhi: float
    allocations: List[AllocationSchema]
    insufficient_data: bool
    snapshot_id: Optional[str] = None


class DiversificationHistoryItem(BaseModel):
    snapshot_id: str
    score: int
    insight: str
    hhi: float
    category_count: int
    created_at: str


class DiversificationHistoryResponse(BaseModel):
    """Response for GET /v1/income/diversification/history"""

    user_id: str
    scores: List[DiversificationHistoryItem]


# Debts


class DebtSchema(BaseModel):
    debt_id: str = Field(..., min_length=1)
    name: str = ""
    balance_cents: int = Field(..., ge=0)
    annual_rate_pct: float = Field(..., ge=0, le=100, description="APR in percent, 19.99 for 19.99%")
    minimum_payment_cents: int = Field(0, ge=0)
    term_months: Optional[int] = Field(None, gt=0)


class PayoffRequest(BaseModel):
    """Request body for POST /v1/debts/payoff"""

    debts: List[DebtSchema]
    extra_monthly_cents: int = Field(0, ge=0)
    strategy: PayoffStrategy = PayoffStrategy.AVALANCHE
    priority: Optional[List[str]] = Field(None, description="Debt ids in payoff order for the custom strategy")


class PayoffMonthSchema(BaseModel):
    month: int
    payment_cents: int
    interest_cents: int
    principal_cents: int
    remaining_balance_cents: int
    balances: Dict[str, int]
    retired: List[str]


class PayoffResponse(BaseModel):
    strategy: PayoffStrategy
    months: int
    total_interest_cents: int
    total_paid_cents: int
    payoff_order: List[str]
    payoff_month: Dict[str, int]
    schedule: List[PayoffMonthSchema]


class CompareRequest(BaseModel):
    """Request body for POST /v1/debts/compare"""

    debts: List[DebtSchema]
    extra_monthly_cents: int = Field(0, ge=0)


class CompareResponse(BaseModel):
    avalanche: PayoffResponse
    snowball: PayoffResponse
    recommended: PayoffStrategy
    interest_saved_cents: int
    months_saved: int


class DebtToIncomeRequest(BaseModel):
    """Request body for POST /v1/debts/debt-to-income"""

    debts: List[DebtSchema]
    monthly_income_cents: int = Field(..., ge=0)


class DebtToIncomeResponse(BaseModel):
    ratio_pct: float
    risk_level: DebtRiskLevel
    monthly_debt_payments_cents: int
    total_debt_cents: int
    monthly_income_cents: int
    insufficient_data: bool


# Subscriptions


class SubscriptionSchema(BaseModel):
    subscription_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    cost_cents: int = Field(..., ge=0)
    recurrence: str = "monthly"
    usage: Optional[float] = Field(None, description="0-100, omitted means not rated")
    value: Optional[float] = Field(None, description="0-100, omitted means not rated")


class SubscriptionValueRequest(BaseModel):
    """Request body for POST /v1/subscriptions/value"""

    subscriptions: List[SubscriptionSchema] = Field(default_factory=list)


class SubscriptionValueItem(BaseModel):
    subscription_id: Optional[str]
    name: str
    monthly_cost_cents: int
    usage: float
    value: float
    score: float
    value_category: ValueCategory
    recommendation: str


class SubscriptionValueSummarySchema(BaseModel):
    total_monthly_cost_cents: int
    average_score: float
    potential_savings_cents: int
    count_by_category: Dict[ValueCategory, int]
    insufficient_data: bool


class SubscriptionValueResponse(BaseModel):
    subscriptions: List[SubscriptionValueItem]
    summary: SubscriptionValueSummarySchema
