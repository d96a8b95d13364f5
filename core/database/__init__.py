# =============================================================================
# core/database/ - ORM Persistence Layer
# =============================================================================
# - base.py: SQLModel base class and timestamp helper
# - entities/: Table models (Book, User, Role, UserRoleLink)
# - session.py: Global engine, request session dependency, init_db()
# - utils.py: Engine construction from DATABASE_URL
# =============================================================================

from .base import Base
from .session import engine, get_session, init_db, seed_roles, session_scope

__all__ = [
    "Base",
    "engine",
    "get_session",
    "init_db",
    "seed_roles",
    "session_scope",
]
