# =============================================================================
# core/repositories/user_repository.py - User and Role Data Access
# =============================================================================

from typing import Optional

from sqlmodel import Session, select

from core.database.entities import Role, RoleName, User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for users."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, User)

    def find_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        return self.session.exec(stmt).first()

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User).where(User.email == email)
        return self.session.exec(stmt).first() is not None


class RoleRepository(BaseRepository[Role]):
    """Repository for roles."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, Role)

    def find_by_name(self, name: RoleName) -> Optional[Role]:
        stmt = select(Role).where(Role.name == name)
        return self.session.exec(stmt).first()
