"""Income/spending diversification score based on the Herfindahl-Hirschman Index"""

from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from finmetrics.domain.exceptions import InvalidAmountError
from finmetrics.domain.models import CategoryAllocation, DiversificationInsight, DiversificationResult
from finmetrics.utils.money import percent, round_half_up

UNCATEGORIZED = "Other Income"

# Lower bounds (inclusive) of each insight band
MODERATE_THRESHOLD = 30
WELL_DIVERSIFIED_THRESHOLD = 60


def build_allocations(pairs: Iterable[Tuple[Optional[str], int | Fraction]]) -> List[CategoryAllocation]:
    """
    Merge (category, amount_cents) pairs by category and attach percentages.

    Amounts may be exact Fractions (normalized monthly equivalents); each
    category total is rounded to whole cents once, after merging. Rows
    without a category are pooled under "Other Income". Category order
    follows first appearance.
    """
    totals: Dict[str, Fraction] = {}
    for category, amount_cents in pairs:
        if amount_cents < 0:
            raise InvalidAmountError(f"Category amount must not be negative, got {amount_cents}")
        label = (category or "").strip() or UNCATEGORIZED
        totals[label] = totals.get(label, Fraction(0)) + amount_cents

    rounded = {label: round_half_up(amount) for label, amount in totals.items()}
    grand_total = sum(rounded.values())
    return [
        CategoryAllocation(category=label, amount_cents=amount, percentage=percent(amount, grand_total))
        for label, amount in rounded.items()
    ]


def classify_diversification(score: int) -> DiversificationInsight:
    if score < MODERATE_THRESHOLD:
        return DiversificationInsight.HIGHLY_CONCENTRATED
    elif score < WELL_DIVERSIFIED_THRESHOLD:
        return DiversificationInsight.MODERATE
    else:
        return DiversificationInsight.WELL_DIVERSIFIED


def diversification_score(allocations: Sequence[CategoryAllocation]) -> DiversificationResult:
    """
    Score how evenly amounts are spread across categories, 0 (one category) to 100 (even split).

    HHI = sum of squared shares, ranging from 1/n (even) to 1 (concentrated).
    It is rescaled to [0, 1] with (HHI - 1/n) / (1 - 1/n) and inverted:

        score = round((1 - normalized) * 100)

    Example:
        Salary 4000, Freelance 1000 → HHI 0.68, normalized 0.36, score 64
    """
    for allocation in allocations:
        if allocation.amount_cents < 0:
            raise InvalidAmountError(
                f"Amount for {allocation.category!r} must not be negative, got {allocation.amount_cents}"
            )

    total = sum(a.amount_cents for a in allocations)
    if not allocations or total == 0:
        return DiversificationResult(
            score=0,
            insight=DiversificationInsight.NO_DATA,
            hhi=0.0,
            allocations=list(allocations),
            insufficient_data=True,
        )

    with_shares = [
        CategoryAllocation(a.category, a.amount_cents, percent(a.amount_cents, total)) for a in allocations
    ]
    hhi = sum(Fraction(a.amount_cents, total) ** 2 for a in allocations)
    n = len(allocations)

    # One category: normalized HHI is 0/0, report maximal concentration
    if n == 1:
        score = 0
    else:
        min_hhi = Fraction(1, n)
        normalized = (hhi - min_hhi) / (1 - min_hhi)
        score = round_half_up((1 - normalized) * 100)

    return DiversificationResult(
        score=score,
        insight=classify_diversification(score),
        hhi=round(float(hhi), 4),
        allocations=with_shares,
    )
