"""Dependency injection for FastAPI endpoints"""

from fastapi import HTTPException, Request

from finmetrics.config import Settings, settings
from finmetrics.domain.exceptions import DomainException

USER_MESSAGES = {
    "invalid_amount": "One of the amounts is not a valid, non-negative number.",
    "invalid_series": "Monthly history must list each month once, in order, without gaps.",
    "invalid_input": "The submitted records are inconsistent.",
    "does_not_converge": "This payment plan never pays off the debt. Increase the monthly payment.",
}


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide service settings (overridable in tests)"""
    return settings


def domain_http_error(exc: DomainException) -> HTTPException:
    """Tagged 422 the UI can turn into a specific message"""
    return HTTPException(
        status_code=422,
        detail={
            "code": exc.code,
            "message": USER_MESSAGES.get(exc.code, str(exc)),
            "reason": str(exc),
        },
    )
