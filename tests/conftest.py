"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finmetrics.api.main import create_app
from finmetrics.infrastructure.database.models import Base
from finmetrics.infrastructure.database.session import get_db
from finmetrics.domain.models import Debt, TimeSeriesPoint


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_debts() -> list[Debt]:
    """Credit card, car loan and student loan"""
    return [
        Debt(debt_id="A", name="Credit card", balance_cents=100_000, annual_rate_pct=20, minimum_payment_cents=5_000),
        Debt(debt_id="B", name="Car loan", balance_cents=200_000, annual_rate_pct=10, minimum_payment_cents=6_000),
        Debt(debt_id="C", name="Student loan", balance_cents=50_000, annual_rate_pct=5, minimum_payment_cents=2_000),
    ]


@pytest.fixture
def linear_series() -> list[TimeSeriesPoint]:
    """Six months, income +$100/month, expenses flat at $800"""
    return [
        TimeSeriesPoint(period=f"2024-{month:02d}", income_cents=100_000 + (month - 1) * 10_000, expense_cents=80_000)
        for month in range(1, 7)
    ]
