# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication with role checks.
#
# Usage:
#   from app.auth import get_current_user, require_roles, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    authenticate_token,
    get_current_user,
    require_roles,
)
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "authenticate_token",
    "get_current_user",
    "require_roles",
    "AuthUser",
    "UserResponse",
]
