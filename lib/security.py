# =============================================================================
# lib/security.py - Password Hashing and JWT Utilities
# =============================================================================
# - hash_password / verify_password: bcrypt via passlib
# - create_access_token: issue an HS256 JWT for a signed-in user
# - decode_access_token: verify signature and expiry, return the claims
#
# Usage:
#   from lib.security import create_access_token, decode_access_token
#
#   token = create_access_token("alice", user_id=1, roles=["ROLE_USER"])
#   claims = decode_access_token(token)   # raises JWTError if invalid
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from app.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    """Hash a plain password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


# =============================================================================
# Tokens
# =============================================================================

def create_access_token(
    subject: str,
    user_id: int,
    roles: list[str],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Issue a signed access token.

    Claims:
        sub: username
        uid: user id
        roles: role names held by the user
        iat / exp: issue and expiry timestamps

    Args:
        subject: Username to put in the `sub` claim
        user_id: Database id of the user
        roles: Role names (e.g., ["ROLE_USER"])
        expires_delta: Token lifetime (defaults to JWT_EXPIRATION_MINUTES)

    Returns:
        str: Encoded JWT
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES))

    claims = {
        "sub": subject,
        "uid": user_id,
        "roles": roles,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        jose.ExpiredSignatureError: If the token has expired
        jose.JWTError: If the signature or format is invalid
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
