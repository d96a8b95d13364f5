# =============================================================================
# core/database/session.py - Engine and Session Management
# =============================================================================
# Holds the process-wide engine and the per-request session dependency.
#
# Usage:
#   from core.database import get_session
#
#   @router.get("/books")
#   def list_books(session: Session = Depends(get_session)):
#       ...
# =============================================================================

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlmodel import Session, SQLModel, select

from app.config import settings

from .entities import Role, RoleName
from .utils import create_engine

logger = logging.getLogger(__name__)

# Create global engine
engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG and settings.is_development)


def get_session() -> Iterator[Session]:
    """
    Dependency generator for database sessions.

    Yields:
        Session: A SQLModel session bound to the global engine
    """
    with Session(engine) as session:
        yield session


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session context for code running outside a request (workers, startup)."""
    with Session(engine) as session:
        yield session


def seed_roles(session: Session) -> int:
    """
    Insert any role from RoleName that is missing.

    Returns:
        int: Number of roles created
    """
    existing = {role.name for role in session.exec(select(Role)).all()}
    missing = [name for name in RoleName if name not in existing]

    for name in missing:
        session.add(Role(name=name))

    if missing:
        session.commit()
        logger.info(f"Seeded roles: {[name.value for name in missing]}")

    return len(missing)


def init_db() -> None:
    """
    Create all tables and seed reference data.

    Safe to call on every startup: create_all skips existing tables and
    seed_roles only inserts what is missing.
    """
    SQLModel.metadata.create_all(engine)
    with session_scope() as session:
        seed_roles(session)
    logger.info("Database initialized")
