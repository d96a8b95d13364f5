# =============================================================================
# core/repositories/base.py - Generic Repository
# =============================================================================
# Common CRUD operations over a SQLModel table. Concrete repositories add
# their own finder methods (find_by_isbn, exists_by_username, ...).
#
# Repositories commit their own writes; the session is scoped to one
# request, so each service call is one unit of work.
# =============================================================================

from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import func
from sqlmodel import Session, SQLModel, select

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: dict[str, Any]):
        """
        Apply equality filters to a select statement.

        Filters with a None value or naming an unknown column are ignored.
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply limit/offset to a select statement."""
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt


class BaseRepository(Generic[EntityType]):
    """Repository with the standard persistence operations for one entity."""

    def __init__(self, session: Session, model: Type[EntityType]) -> None:
        """
        Args:
            session: SQLModel Session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    def save(self, entity: EntityType) -> EntityType:
        """
        Insert or update an entity.

        Returns:
            The persisted entity with generated fields populated
        """
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def find_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by primary key, or None."""
        return self.session.get(self.model, entity_id)

    def exists_by_id(self, entity_id: int) -> bool:
        return self.find_by_id(entity_id) is not None

    def find_all(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[dict[str, Any]] = None,
    ) -> Sequence[EntityType]:
        """
        List entities ordered by id, with optional filtering and pagination.
        """
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = stmt.order_by(self.model.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        return self.session.exec(stmt).all()

    def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        return self.session.exec(stmt).one()

    def delete(self, entity: EntityType) -> None:
        self.session.delete(entity)
        self.session.commit()

    def delete_by_id(self, entity_id: int) -> bool:
        """
        Delete entity by primary key.

        Returns:
            True if deleted, False if not found
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            return False
        self.delete(entity)
        return True
