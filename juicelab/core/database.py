"""
Database engine and session management using SQLAlchemy.
SQLite by default; any SQLAlchemy URL works via DATABASE_URL.
"""

from __future__ import annotations

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from juicelab.core.config import settings


def _connect_args(url: str) -> dict:
    # SQLite + FastAPI threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    echo=settings.SQL_ECHO,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Declarative base for all ledger tables."""
    pass


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables from model metadata."""
    import juicelab.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
