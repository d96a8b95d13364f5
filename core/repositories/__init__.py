# =============================================================================
# core/repositories/ - Data Access Layer
# =============================================================================
# Thin wrappers around the ORM session, one per aggregate.
# =============================================================================

from .base import BaseRepository, QueryBuilder
from .book_repository import BookRepository
from .user_repository import RoleRepository, UserRepository

__all__ = [
    "BaseRepository",
    "QueryBuilder",
    "BookRepository",
    "RoleRepository",
    "UserRepository",
]
