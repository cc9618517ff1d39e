"""Income diversification score and its saved history"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finmetrics.api.dependencies import domain_http_error, get_request_id, get_settings
from finmetrics.api.v1.schemas import (
    AllocationSchema,
    DiversificationHistoryItem,
    DiversificationHistoryResponse,
    DiversificationRequest,
    DiversificationResponse,
)
from finmetrics.config import Settings
from finmetrics.domain.diversification import build_allocations, diversification_score
from finmetrics.domain.exceptions import InvalidInputError
from finmetrics.domain.normalizer import is_recurring, to_monthly_equivalent
from finmetrics.infrastructure.database.repositories import DiversificationRepository
from finmetrics.infrastructure.database.session import get_db
from finmetrics.infrastructure.observability.logging import log_computation
from finmetrics.infrastructure.observability.metrics import record_computation, record_diversification

router = APIRouter()


@router.post("/income/diversification", response_model=DiversificationResponse)
def create_diversification_score(
    request_body: DiversificationRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Score how diversified income is across categories.

    Flow:
    1. Normalize each recurring source to its exact monthly equivalent (one-time sources are left out)
    2. Merge by category, round each category once, and compute the HHI-based score
    3. Save a snapshot when user_id is given
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        allocations = build_allocations(
            (source.category, to_monthly_equivalent(source.amount_cents, source.frequency))
            for source in request_body.sources
            if is_recurring(source.frequency)
        )
        result = diversification_score(allocations)

        snapshot_id = None
        if request_body.user_id:
            snapshot = DiversificationRepository(db).save_score(request_body.user_id, result)
            db.commit()
            snapshot_id = str(snapshot.id)

        record_diversification(result.insight.value, result.insufficient_data)
        log_computation(
            request_id,
            "diversification",
            "insufficient_data" if result.insufficient_data else "ok",
            (time.time() - start_time) * 1000,
            score=result.score,
            insight=result.insight.value,
        )

        return DiversificationResponse(
            score=result.score,
            insight=result.insight,
            hhi=result.hhi,
            allocations=[
                AllocationSchema(category=a.category, amount_cents=a.amount_cents, percentage=a.percentage)
                for a in result.allocations
            ],
            insufficient_data=result.insufficient_data,
            snapshot_id=snapshot_id,
        )

    except InvalidInputError as e:
        db.rollback()
        record_computation("diversification", "invalid_input")
        logging.warning(f"Invalid income sources: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except Exception as e:
        db.rollback()
        record_computation("diversification", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/income/diversification/history", response_model=DiversificationHistoryResponse)
def get_diversification_history(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Most recent saved diversification scores for a user"""
    try:
        repo = DiversificationRepository(db)
        snapshots = repo.get_scores_by_user(user_id, limit=settings.diversification_history_limit)

    except Exception as e:
        logging.error(f"Failed to load diversification history: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return DiversificationHistoryResponse(
        user_id=user_id,
        scores=[
            DiversificationHistoryItem(
                snapshot_id=str(s.id),
                score=s.score,
                insight=s.insight,
                hhi=s.hhi,
                category_count=s.category_count,
                created_at=s.created_at.isoformat(),
            )
            for s in snapshots
        ],
    )
