"""Data access layer for metric snapshots"""

from typing import List
from sqlalchemy.orm import Session
from finmetrics.infrastructure.database.models import DiversificationSnapshot
from finmetrics.domain.models import DiversificationResult


class DiversificationRepository:
    """Repository for income diversification score history"""

    def __init__(self, db: Session):
        self.db = db

    def save_score(self, user_id: str, result: DiversificationResult) -> DiversificationSnapshot:
        """Persist a computed score; the caller commits"""
        snapshot = DiversificationSnapshot(
            user_id=user_id,
            score=result.score,
            insight=result.insight.value,
            hhi=result.hhi,
            category_count=len(result.allocations),
            allocations=[
                {
                    "category": a.category,
                    "amount_cents": a.amount_cents,
                    "percentage": a.percentage,
                }
                for a in result.allocations
            ],
        )
        self.db.add(snapshot)
        self.db.flush()  # Get ID without committing
        return snapshot

    def get_scores_by_user(self, user_id: str, limit: int = 10) -> List[DiversificationSnapshot]:
        """Fetch most recent scores for a user"""
        return (
            self.db.query(DiversificationSnapshot)
            .filter(DiversificationSnapshot.user_id == user_id)
            .order_by(DiversificationSnapshot.created_at.desc())
            .limit(limit)
            .all()
        )
