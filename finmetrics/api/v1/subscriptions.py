"""POST /v1/subscriptions/value - subscription value classification"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from finmetrics.api.dependencies import domain_http_error, get_request_id
from finmetrics.api.v1.schemas import (
    SubscriptionValueItem,
    SubscriptionValueRequest,
    SubscriptionValueResponse,
    SubscriptionValueSummarySchema,
)
from finmetrics.domain.exceptions import InvalidInputError
from finmetrics.domain.models import SubscriptionValueRecord
from finmetrics.domain.subscription_value import classify_value, summarize_value
from finmetrics.infrastructure.observability.logging import log_computation
from finmetrics.infrastructure.observability.metrics import record_computation

router = APIRouter()


@router.post("/subscriptions/value", response_model=SubscriptionValueResponse)
def create_subscription_value(request_body: SubscriptionValueRequest, request: Request):
    """Rank subscriptions by monthly cost with a poor/fair/good value label"""
    start_time = time.time()
    request_id = get_request_id(request)

    records = [
        SubscriptionValueRecord(
            name=s.name,
            cost_cents=s.cost_cents,
            recurrence=s.recurrence,
            usage=s.usage,
            value=s.value,
            subscription_id=s.subscription_id,
        )
        for s in request_body.subscriptions
    ]

    try:
        values = classify_value(records)
        summary = summarize_value(values)

    except InvalidInputError as e:
        record_computation("subscription_value", "invalid_input")
        logging.warning(f"Invalid subscriptions: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except Exception as e:
        record_computation("subscription_value", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    outcome = "insufficient_data" if summary.insufficient_data else "ok"
    record_computation("subscription_value", outcome)
    log_computation(request_id, "subscription_value", outcome, (time.time() - start_time) * 1000, count=len(values))

    return SubscriptionValueResponse(
        subscriptions=[
            SubscriptionValueItem(
                subscription_id=v.record.subscription_id,
                name=v.record.name,
                monthly_cost_cents=v.monthly_cost_cents,
                usage=v.usage,
                value=v.value,
                score=v.score,
                value_category=v.value_category,
                recommendation=v.recommendation,
            )
            for v in values
        ],
        summary=SubscriptionValueSummarySchema(
            total_monthly_cost_cents=summary.total_monthly_cost_cents,
            average_score=summary.average_score,
            potential_savings_cents=summary.potential_savings_cents,
            count_by_category=summary.count_by_category,
            insufficient_data=summary.insufficient_data,
        ),
    )
