"""POST /v1/cashflow/projection - next-month cash-flow forecast"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Request

from finmetrics.api.dependencies import domain_http_error, get_request_id
from finmetrics.api.v1.schemas import CashflowProjectionRequest, CashflowProjectionResponse
from finmetrics.domain.exceptions import InvalidInputError
from finmetrics.domain.models import TimeSeriesPoint
from finmetrics.domain.normalizer import monthly_recurring_total
from finmetrics.domain.projection import project_next
from finmetrics.infrastructure.observability.logging import log_computation
from finmetrics.infrastructure.observability.metrics import record_computation

router = APIRouter()


@router.post("/cashflow/projection", response_model=CashflowProjectionResponse)
def create_cashflow_projection(request_body: CashflowProjectionRequest, request: Request):
    """
    Project next month's income and expenses from monthly history.

    Recurring incomes, when supplied, set projected income directly (sum of
    monthly equivalents); otherwise income is trended like expenses.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        series = [
            TimeSeriesPoint(period=p.period, income_cents=p.income_cents, expense_cents=p.expense_cents)
            for p in request_body.series
        ]
        recurring = (
            monthly_recurring_total((r.amount_cents, r.frequency) for r in request_body.recurring_incomes)
            if request_body.recurring_incomes
            else None
        )
        projection = project_next(series, recurring_income_cents=recurring)

    except InvalidInputError as e:
        record_computation("cashflow", "invalid_input")
        logging.warning(f"Invalid cash-flow input: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except Exception as e:
        record_computation("cashflow", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    outcome = "insufficient_data" if projection.insufficient_data else "ok"
    record_computation("cashflow", outcome)
    log_computation(request_id, "cashflow", outcome, (time.time() - start_time) * 1000, months=len(series))

    return CashflowProjectionResponse(**asdict(projection))
