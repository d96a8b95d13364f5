# =============================================================================
# core/database/utils.py - Engine Helpers
# =============================================================================
# Builds the SQLAlchemy engine from DATABASE_URL.
#
# - postgres:// URLs are rewritten to the psycopg driver
# - SQLite connections may be shared across threadpool workers
# - In-memory SQLite uses a single shared connection (StaticPool), otherwise
#   every new connection would see an empty database
# =============================================================================

import re

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine as sqlmodel_create_engine


def normalize_database_url(db_url: str) -> str:
    """
    Rewrite Postgres URLs so the psycopg (v3) driver is used.

    Example:
        postgres://u:p@db/app -> postgresql+psycopg://u:p@db/app
    """
    return re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+psycopg://", db_url, count=1)


def is_memory_sqlite(db_url: str) -> bool:
    """Check whether the URL points at an in-memory SQLite database."""
    return db_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in db_url


def create_engine(db_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the configured database.

    Args:
        db_url: Database connection URL
        echo: Log every SQL statement

    Returns:
        Configured Engine instance
    """
    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if is_memory_sqlite(db_url):
            kwargs["poolclass"] = StaticPool
        return sqlmodel_create_engine(db_url, echo=echo, **kwargs)

    return sqlmodel_create_engine(normalize_database_url(db_url), echo=echo, pool_pre_ping=True)
