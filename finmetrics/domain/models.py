"""Domain models - pure Python dataclasses representing financial snapshots and metric results"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


class RecurrenceFrequency(str, Enum):
    """How often a recurring amount is paid or received"""

    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi_weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"
    ONE_TIME = "one_time"


class PayoffStrategy(str, Enum):
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"
    HYBRID = "hybrid"
    CUSTOM = "custom"


class DiversificationInsight(str, Enum):
    NO_DATA = "no_data"
    HIGHLY_CONCENTRATED = "highly_concentrated"
    MODERATE = "moderate"
    WELL_DIVERSIFIED = "well_diversified"


class ValueCategory(str, Enum):
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"


class DebtRiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


# Inputs: read-only snapshots of stored records


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Totals for one calendar month"""

    period: str  # "YYYY-MM"
    income_cents: int
    expense_cents: int


@dataclass(frozen=True)
class CashflowEntry:
    """Single income or expense row used to build a monthly series"""

    day: date
    amount_cents: int
    is_income: bool


@dataclass(frozen=True)
class RecurringAmount:
    """Recurring income (or bill) as stored: per-period amount plus frequency tag"""

    amount_cents: int
    frequency: RecurrenceFrequency | str
    label: str = ""


@dataclass(frozen=True)
class Debt:
    """Debt snapshot; the simulator works on its own copy of the balance"""

    debt_id: str
    balance_cents: int
    annual_rate_pct: float  # 19.99 means 19.99% APR
    minimum_payment_cents: int
    term_months: Optional[int] = None
    name: str = ""


@dataclass(frozen=True)
class CategoryAllocation:
    """Amount attributed to one category and its share of the total"""

    category: str
    amount_cents: int
    percentage: float = 0.0


@dataclass(frozen=True)
class SubscriptionValueRecord:
    """Subscription with usage/value signals on a 0-100 scale (None = not rated)"""

    name: str
    cost_cents: int
    recurrence: RecurrenceFrequency | str = RecurrenceFrequency.MONTHLY
    usage: Optional[float] = None
    value: Optional[float] = None
    subscription_id: Optional[str] = None


# Outputs


@dataclass
class TrendPoint:
    period: str
    income_cents: int
    expense_cents: int
    net_cents: int


@dataclass
class MonthOverMonth:
    """Percentage change between the two most recent actual months"""

    income_pct: float = 0.0
    expenses_pct: float = 0.0


@dataclass
class CashflowProjection:
    projected_income_cents: int
    projected_expenses_cents: int
    net_cashflow_cents: int
    savings_rate: float
    month_over_month: MonthOverMonth
    monthly_trend: List[TrendPoint]
    insufficient_data: bool = False


@dataclass
class DiversificationResult:
    score: int
    insight: DiversificationInsight
    hhi: float
    allocations: List[CategoryAllocation]
    insufficient_data: bool = False


@dataclass
class PayoffMonth:
    """State of all debts at the end of one simulated month"""

    month: int
    payment_cents: int
    interest_cents: int
    principal_cents: int
    remaining_balance_cents: int
    balances: Dict[str, int]
    retired: List[str] = field(default_factory=list)


@dataclass
class PayoffResult:
    strategy: PayoffStrategy
    months: int
    total_interest_cents: int
    total_paid_cents: int
    schedule: List[PayoffMonth]
    payoff_order: List[str]
    payoff_month: Dict[str, int]


@dataclass
class StrategyComparison:
    avalanche: PayoffResult
    snowball: PayoffResult
    recommended: PayoffStrategy
    interest_saved_cents: int
    months_saved: int


@dataclass
class DebtToIncome:
    ratio_pct: float
    risk_level: DebtRiskLevel
    monthly_debt_payments_cents: int
    total_debt_cents: int
    monthly_income_cents: int
    insufficient_data: bool = False


@dataclass
class SubscriptionValue:
    record: SubscriptionValueRecord
    monthly_cost_cents: int
    usage: float
    value: float
    score: float
    value_category: ValueCategory
    recommendation: str


@dataclass
class SubscriptionValueSummary:
    total_monthly_cost_cents: int
    average_score: float
    potential_savings_cents: int
    count_by_category: Dict[ValueCategory, int]
    insufficient_data: bool = False
