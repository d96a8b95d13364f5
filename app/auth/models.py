# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user resolved from a JWT.

    Built from the token's claims after confirming the user still exists.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str | None = None
    roles: tuple[str, ...] = ()

    def has_role(self, role: str) -> bool:
        return role in self.roles


class UserResponse(BaseModel):
    """User profile returned by GET /api/auth/me."""
    id: int
    username: str
    email: str | None = None
    roles: list[str] = []


class TokenPayload(BaseModel):
    """
    Decoded JWT payload issued by lib.security.create_access_token.
    """
    sub: str  # Username
    uid: int
    roles: list[str] = []
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
