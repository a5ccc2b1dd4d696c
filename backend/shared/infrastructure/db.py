"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from shared.config.settings import DATABASE_URL, settings


def _calculate_pool_size() -> int:
    """(2 * CPU cores) + 1, capped at 20."""
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def build_engine(url: str = DATABASE_URL, echo: bool | None = None) -> Engine:
    """
    Create an engine with settings appropriate to its dialect.

    PostgreSQL gets a sized connection pool with timeouts. SQLite (local
    development and tests) gets a single shared connection for in-memory
    databases and no pool sizing.
    """
    echo = settings.database_echo if echo is None else echo
    kwargs: dict[str, Any] = {"echo": echo}

    if make_url(url).get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_pre_ping=True,  # Verify connections before using
            pool_size=_calculate_pool_size(),
            max_overflow=15,
            pool_timeout=30,  # Wait max 30s for a pooled connection
            pool_recycle=1800,  # Recycle connections after 30 minutes
            connect_args={"connect_timeout": 10},
        )

    return create_engine(url, **kwargs)


engine = build_engine()

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.scalars(select(Item)).all()

    The session is closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context() as db:
            seed_menu(db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit, rolling back on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
