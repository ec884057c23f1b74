"""Database session management

Sync only. SQLite by default, PostgreSQL via DATABASE_URL.
Schema changes go through Alembic; init_db() only bootstraps a fresh local DB.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        # FastAPI runs sync endpoints in a thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    **_engine_kwargs(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db() -> None:
    """Create missing tables (local SQLite bootstrap)"""
    from app.models.db import Base

    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() == "sqlite" and url.database:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(engine)
    logger.info("DB ready: %s", url.render_as_string(hide_password=True))


def get_db() -> Generator[Session, None, None]:
    """Session factory for FastAPI Depends"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
