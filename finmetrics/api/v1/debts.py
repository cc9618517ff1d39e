"""Debt payoff planning endpoints"""

import time
import logging
from dataclasses import asdict
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from finmetrics.api.dependencies import domain_http_error, get_request_id, get_settings
from finmetrics.api.v1.schemas import (
    CompareRequest,
    CompareResponse,
    DebtSchema,
    DebtToIncomeRequest,
    DebtToIncomeResponse,
    PayoffRequest,
    PayoffResponse,
)
from finmetrics.config import Settings
from finmetrics.domain.amortization import compare_strategies, simulate_payoff
from finmetrics.domain.debt_ratios import debt_to_income
from finmetrics.domain.exceptions import DoesNotConvergeError, InvalidInputError
from finmetrics.domain.models import Debt
from finmetrics.infrastructure.observability.logging import log_computation
from finmetrics.infrastructure.observability.metrics import record_computation, record_payoff

router = APIRouter()


def to_domain_debts(debts: List[DebtSchema]) -> List[Debt]:
    return [
        Debt(
            debt_id=d.debt_id,
            name=d.name,
            balance_cents=d.balance_cents,
            annual_rate_pct=d.annual_rate_pct,
            minimum_payment_cents=d.minimum_payment_cents,
            term_months=d.term_months,
        )
        for d in debts
    ]


@router.post("/debts/payoff", response_model=PayoffResponse)
def create_payoff_plan(
    request_body: PayoffRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Month-by-month payoff schedule for the chosen strategy.

    Returns 422 with code does_not_converge when the payments never retire the debt.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = simulate_payoff(
            to_domain_debts(request_body.debts),
            request_body.extra_monthly_cents,
            request_body.strategy,
            priority=request_body.priority,
            max_months=settings.payoff_max_months,
        )

    except DoesNotConvergeError as e:
        record_computation("payoff", "does_not_converge")
        logging.warning(f"Payoff plan does not converge: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except InvalidInputError as e:
        record_computation("payoff", "invalid_input")
        logging.warning(f"Invalid debts: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except Exception as e:
        record_computation("payoff", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_payoff(result.months)
    log_computation(
        request_id,
        "payoff",
        "ok",
        (time.time() - start_time) * 1000,
        strategy=result.strategy.value,
        months=result.months,
    )

    return PayoffResponse(**asdict(result))


@router.post("/debts/compare", response_model=CompareResponse)
def create_strategy_comparison(
    request_body: CompareRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Avalanche vs snowball for the same debts and extra payment"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        comparison = compare_strategies(
            to_domain_debts(request_body.debts),
            request_body.extra_monthly_cents,
            max_months=settings.payoff_max_months,
        )

    except DoesNotConvergeError as e:
        record_computation("compare", "does_not_converge")
        logging.warning(f"Strategy comparison does not converge: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except InvalidInputError as e:
        record_computation("compare", "invalid_input")
        logging.warning(f"Invalid debts: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except Exception as e:
        record_computation("compare", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_computation("compare")
    log_computation(
        request_id,
        "compare",
        "ok",
        (time.time() - start_time) * 1000,
        recommended=comparison.recommended.value,
    )

    return CompareResponse(**asdict(comparison))


@router.post("/debts/debt-to-income", response_model=DebtToIncomeResponse)
def create_debt_to_income(request_body: DebtToIncomeRequest, request: Request):
    """Minimum debt payments as a share of monthly income"""
    request_id = get_request_id(request)

    try:
        ratio = debt_to_income(to_domain_debts(request_body.debts), request_body.monthly_income_cents)

    except InvalidInputError as e:
        record_computation("debt_to_income", "invalid_input")
        logging.warning(f"Invalid debt-to-income input: {e}", extra={"request_id": request_id})
        raise domain_http_error(e)

    except Exception as e:
        record_computation("debt_to_income", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_computation("debt_to_income", "insufficient_data" if ratio.insufficient_data else "ok")
    return DebtToIncomeResponse(**asdict(ratio))
