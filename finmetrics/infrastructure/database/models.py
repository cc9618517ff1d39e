"""SQLAlchemy ORM models for persisted metric snapshots"""

import uuid
from sqlalchemy import Column, DateTime, Float, Integer, JSON, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class DiversificationSnapshot(Base):
    """Income diversification score saved after a computation"""

    __tablename__ = "income_diversification_score"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    score = Column(Integer, nullable=False)
    insight = Column(Text, nullable=False)
    hhi = Column(Float, nullable=False)
    category_count = Column(Integer, nullable=False)
    allocations = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
