"""Subscription value (ROI) classification"""

from typing import Dict, List, Optional, Sequence

from finmetrics.domain.models import (
    SubscriptionValue,
    SubscriptionValueRecord,
    SubscriptionValueSummary,
    ValueCategory,
)
from finmetrics.domain.normalizer import to_monthly_cents

NEUTRAL_SIGNAL = 50.0
USAGE_WEIGHT = 0.5
VALUE_WEIGHT = 0.5

GOOD_THRESHOLD = 70.0
FAIR_THRESHOLD = 40.0

RECOMMENDATIONS: Dict[ValueCategory, str] = {
    ValueCategory.POOR: "Consider cancelling this subscription or finding ways to use it more frequently.",
    ValueCategory.FAIR: "Look for ways to maximize the value of this subscription or consider alternatives.",
    ValueCategory.GOOD: "This subscription provides good value. Continue using it regularly.",
}


def _signal(raw: Optional[float]) -> float:
    """0-100 signal; missing or unreadable ratings count as neutral"""
    if raw is None:
        return NEUTRAL_SIGNAL
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return NEUTRAL_SIGNAL
    if value != value:  # NaN
        return NEUTRAL_SIGNAL
    return min(100.0, max(0.0, value))


def value_score(usage: Optional[float], value: Optional[float]) -> float:
    return round(USAGE_WEIGHT * _signal(usage) + VALUE_WEIGHT * _signal(value), 1)


def categorize(score: float) -> ValueCategory:
    if score >= GOOD_THRESHOLD:
        return ValueCategory.GOOD
    elif score >= FAIR_THRESHOLD:
        return ValueCategory.FAIR
    else:
        return ValueCategory.POOR


def classify_value(records: Sequence[SubscriptionValueRecord]) -> List[SubscriptionValue]:
    """
    Score each subscription and bucket it into poor / fair / good.

    score = 0.5 * usage + 0.5 * value, with missing signals counted as 50, so
    one unrated subscription never fails the batch.

    Returns:
        Results sorted by monthly-equivalent cost, most expensive first

    Raises:
        InvalidAmountError: a cost is negative or non-finite
    """
    results = []
    for record in records:
        score = value_score(record.usage, record.value)
        category = categorize(score)
        results.append(
            SubscriptionValue(
                record=record,
                monthly_cost_cents=to_monthly_cents(record.cost_cents, record.recurrence),
                usage=_signal(record.usage),
                value=_signal(record.value),
                score=score,
                value_category=category,
                recommendation=RECOMMENDATIONS[category],
            )
        )

    results.sort(key=lambda r: r.monthly_cost_cents, reverse=True)
    return results


def summarize_value(values: Sequence[SubscriptionValue]) -> SubscriptionValueSummary:
    """Totals for a classified batch; potential savings = monthly cost of poor-value subscriptions"""
    counts = {category: 0 for category in ValueCategory}
    for v in values:
        counts[v.value_category] += 1

    if not values:
        return SubscriptionValueSummary(
            total_monthly_cost_cents=0,
            average_score=0.0,
            potential_savings_cents=0,
            count_by_category=counts,
            insufficient_data=True,
        )

    return SubscriptionValueSummary(
        total_monthly_cost_cents=sum(v.monthly_cost_cents for v in values),
        average_score=round(sum(v.score for v in values) / len(values), 1),
        potential_savings_cents=sum(v.monthly_cost_cents for v in values if v.value_category is ValueCategory.POOR),
        count_by_category=counts,
    )
