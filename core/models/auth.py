# =============================================================================
# core/models/auth.py - Authentication Schemas
# =============================================================================
# Request/response bodies for /api/auth/*.
# =============================================================================

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """
    Body for POST /api/auth/signup.

    `roles` accepts "admin", "mod" and "user". Omitted or empty means "user".
    """

    username: str = Field(..., min_length=3, max_length=20, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr = Field(..., max_length=50)
    password: str = Field(..., min_length=6, max_length=40)
    roles: list[str] | None = Field(default=None, examples=[["user"], ["mod", "user"]])


class SigninRequest(BaseModel):
    """Body for POST /api/auth/signin."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class JwtResponse(BaseModel):
    """Token returned after a successful sign-in."""

    token: str
    type: str = "Bearer"
    id: int
    username: str
    email: str
    roles: list[str]


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
