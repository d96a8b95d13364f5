# =============================================================================
# core/database/entities/users.py - User, Role and the user_roles Join Table
# =============================================================================
# Users and roles are many-to-many. The link table is managed entirely by
# the ORM: appending to user.roles inserts the user_roles row.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import Field, Relationship

from ..base import Base, utc_now


class RoleName(str, Enum):
    """Roles a user can hold."""
    ROLE_USER = "ROLE_USER"
    ROLE_MODERATOR = "ROLE_MODERATOR"
    ROLE_ADMIN = "ROLE_ADMIN"


class UserRoleLink(Base, table=True):
    """Join table between users and roles."""

    __tablename__ = "user_roles"

    user_id: Optional[int] = Field(default=None, foreign_key="users.id", primary_key=True)
    role_id: Optional[int] = Field(default=None, foreign_key="roles.id", primary_key=True)


class Role(Base, table=True):
    """Entity for roles.

    Table: roles
    """

    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: RoleName = Field(unique=True, index=True)

    users: List["User"] = Relationship(back_populates="roles", link_model=UserRoleLink)

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name={self.name})"


class User(Base, table=True):
    """Entity for registered users.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=20, unique=True, index=True)
    email: str = Field(max_length=50, unique=True, index=True)
    # bcrypt hash, never the plain password
    password: str = Field(max_length=120)
    created_at: datetime = Field(default_factory=utc_now)

    roles: List[Role] = Relationship(
        back_populates="users",
        link_model=UserRoleLink,
        sa_relationship_kwargs={"lazy": "selectin"},
    )

    @property
    def role_names(self) -> list[str]:
        return [role.name.value for role in self.roles]

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"
