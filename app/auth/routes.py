# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# POST /api/auth/signup   register a user
# POST /api/auth/signin   exchange credentials for a JWT
# GET  /api/auth/me       current user profile
# GET  /api/auth/verify   check a stored token
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, UserResponse
from core.database import get_session
from core.models.auth import JwtResponse, MessageResponse, SigninRequest, SignupRequest
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    request: SignupRequest,
    session: Session = Depends(get_session),
) -> MessageResponse:
    """
    Register a new user.

    Roles: "admin", "mod", "user" (default "user").

    Raises:
        409: If the username or email is taken
        400: If a role is unknown or a field is invalid
    """
    AuthService(session).signup(request)
    return MessageResponse(message="User registered successfully!")


@router.post("/signin", response_model=JwtResponse)
def signin(
    request: SigninRequest,
    session: Session = Depends(get_session),
) -> JwtResponse:
    """
    Sign in and receive a bearer token.

    Raises:
        401: If the username or password is wrong
    """
    return AuthService(session).signin(request)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
    """
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=list(user.roles),
    )


@router.get("/verify")
def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": user.id,
        "username": user.username,
    }
