"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finmetrics.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finmetrics.api.v1 import cashflow, debts, diversification, subscriptions
from finmetrics.infrastructure.observability.logging import setup_logging
from finmetrics.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="finmetrics",
        description="Cash-flow forecasts, diversification scores, debt payoff plans and subscription value",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(cashflow.router, prefix="/v1", tags=["cashflow"])
    app.include_router(diversification.router, prefix="/v1", tags=["income"])
    app.include_router(debts.router, prefix="/v1", tags=["debts"])
    app.include_router(subscriptions.router, prefix="/v1", tags=["subscriptions"])

    return app


app = create_app()
