# =============================================================================
# core/services/auth_service.py - Sign-up and Sign-in
# =============================================================================
# Registers users with hashed passwords and roles, and issues JWTs.
# =============================================================================

import logging

from sqlmodel import Session

from app.exceptions import BadRequestError, DuplicateResourceError, UnauthorizedError
from core.database.entities import RoleName, User
from core.models.auth import JwtResponse, SigninRequest, SignupRequest
from core.repositories import RoleRepository, UserRepository
from lib.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

# Role names accepted in a sign-up request
ROLE_ALIASES: dict[str, RoleName] = {
    "admin": RoleName.ROLE_ADMIN,
    "mod": RoleName.ROLE_MODERATOR,
    "user": RoleName.ROLE_USER,
}


class AuthService:
    """Service for user registration and authentication."""

    def __init__(self, session: Session):
        self.users = UserRepository(session)
        self.roles = RoleRepository(session)

    def resolve_roles(self, requested: list[str] | None) -> list[RoleName]:
        """
        Map requested role aliases to RoleName values.

        Raises:
            BadRequestError: If an alias is unknown
        """
        if not requested:
            return [RoleName.ROLE_USER]

        resolved: list[RoleName] = []
        for alias in requested:
            role_name = ROLE_ALIASES.get(alias.strip().lower())
            if role_name is None:
                raise BadRequestError(
                    f"Unknown role: {alias}",
                    suggestion=f"Use one of: {', '.join(ROLE_ALIASES)}",
                    details={"role": alias},
                )
            if role_name not in resolved:
                resolved.append(role_name)
        return resolved

    def signup(self, request: SignupRequest) -> User:
        """
        Register a new user.

        Raises:
            DuplicateResourceError: If the username or email is taken
            BadRequestError: If a requested role doesn't exist
        """
        if self.users.exists_by_username(request.username):
            raise DuplicateResourceError("User", "username", request.username)
        if self.users.exists_by_email(request.email):
            raise DuplicateResourceError("User", "email", request.email)

        roles = []
        for role_name in self.resolve_roles(request.roles):
            role = self.roles.find_by_name(role_name)
            if role is None:
                raise BadRequestError(
                    f"Role is not configured: {role_name.value}",
                    suggestion="Restart the API so reference roles are seeded",
                )
            roles.append(role)

        user = User(
            username=request.username,
            email=request.email,
            password=hash_password(request.password),
            roles=roles,
        )
        user = self.users.save(user)
        logger.info(f"Registered user {user.id}: {user.username} {user.role_names}")

        from workers.tasks import send_welcome_email

        # The account exists at this point; a broker outage only loses the email
        try:
            send_welcome_email.delay(user.id, user.username, user.email)
        except Exception as e:
            logger.warning(f"Could not queue welcome email for {user.username}: {e}")

        return user

    def signin(self, request: SigninRequest) -> JwtResponse:
        """
        Check credentials and issue an access token.

        Raises:
            UnauthorizedError: If the username or password is wrong
        """
        user = self.users.find_by_username(request.username)
        if user is None or not verify_password(request.password, user.password):
            logger.warning(f"Failed sign-in for username: {request.username}")
            raise UnauthorizedError()

        roles = user.role_names
        token = create_access_token(user.username, user_id=user.id, roles=roles)

        logger.info(f"User signed in: {user.username}")
        return JwtResponse(
            token=token,
            id=user.id,
            username=user.username,
            email=user.email,
            roles=roles,
        )
