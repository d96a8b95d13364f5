# =============================================================================
# core/database/base.py - SQLModel Base Class
# =============================================================================
# Foundation for every table model in the project.
# =============================================================================

from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def utc_now() -> datetime:
    """Current UTC time, used as the default for timestamp columns."""
    return datetime.now(timezone.utc)
