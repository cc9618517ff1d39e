"""Database engine and session management"""

from functools import lru_cache
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from finmetrics.config import settings


def build_engine(database_url: str) -> Engine:
    """Engine with pooling for server databases; SQLite gets thread-sharing instead"""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})

    # Pool: up to 20 connections, recycled hourly to avoid stale connections
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    """Created on first use so importing the app never opens a connection"""
    return sessionmaker(autocommit=False, autoflush=False, bind=build_engine(settings.database_url))


def get_db() -> Generator[Session, None, None]:
    """Dependency injection for database sessions"""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
