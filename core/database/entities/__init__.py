# =============================================================================
# core/database/entities/ - ORM Table Models
# =============================================================================
# Importing this package registers every table on SQLModel.metadata.
# =============================================================================

from .books import Book
from .users import Role, RoleName, User, UserRoleLink

__all__ = [
    "Book",
    "Role",
    "RoleName",
    "User",
    "UserRoleLink",
]
