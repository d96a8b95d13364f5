# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and role checks.
#
# Usage:
#   from app.auth import get_current_user, require_roles, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
#
#   @router.delete("/admin-only", dependencies=[Depends(require_roles("ROLE_ADMIN"))])
#   def admin_only(): ...
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError
from sqlmodel import Session

from app.auth.models import AuthUser, TokenPayload
from core.database import get_session
from core.repositories import UserRepository
from lib.security import decode_access_token

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor (auto_error disabled so a missing token is a 401)
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def authenticate_token(token: str, session: Session) -> AuthUser:
    """
    Validate a JWT and load the user it names.

    This:
    1. Verifies the JWT signature and expiry
    2. Parses the claims
    3. Confirms the user still exists

    Raises:
        HTTPException: 401 if the token is invalid, expired or the user is gone
    """
    try:
        payload = TokenPayload.model_validate(decode_access_token(token))

    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")

    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized("Invalid token")

    except ValidationError:
        logger.warning("JWT token is missing required claims")
        raise _unauthorized("Invalid token: missing claims")

    user = UserRepository(session).find_by_username(payload.sub)
    if user is None or user.id != payload.uid:
        logger.warning(f"JWT refers to unknown user: {payload.sub}")
        raise _unauthorized("Invalid token: user not found")

    return AuthUser(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=tuple(user.role_names),
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: Session = Depends(get_session),
) -> AuthUser:
    """
    Extract and validate the user from the Authorization header.

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    user = authenticate_token(credentials.credentials, session)
    logger.debug(f"Authenticated user: {user.username}")
    return user


def require_roles(*roles: str):
    """
    Build a dependency that admits users holding any of the given roles.

    Raises:
        HTTPException: 403 if the user holds none of the roles
    """

    def role_checker(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if not any(user.has_role(role) for role in roles):
            logger.warning(f"User {user.username} lacks roles {roles}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Operation requires one of the roles: {', '.join(roles)}",
            )
        return user

    return role_checker
