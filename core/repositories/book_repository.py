# =============================================================================
# core/repositories/book_repository.py - Book Data Access
# =============================================================================

from typing import Optional, Sequence

from sqlalchemy import func
from sqlmodel import Session, select

from core.database.entities import Book

from .base import BaseRepository, QueryBuilder


class BookRepository(BaseRepository[Book]):
    """Repository for books."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, Book)

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        stmt = select(Book).where(Book.isbn == isbn)
        return self.session.exec(stmt).first()

    def exists_by_isbn(self, isbn: str) -> bool:
        return self.find_by_isbn(isbn) is not None

    def _search_stmt(self, stmt, author: Optional[str], title: Optional[str]):
        if author:
            stmt = stmt.where(Book.author == author)
        if title:
            stmt = stmt.where(func.lower(Book.title).contains(title.lower()))
        return stmt

    def search(
        self,
        author: Optional[str] = None,
        title: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Sequence[Book]:
        """
        Find books by exact author and/or case-insensitive title fragment.
        """
        stmt = self._search_stmt(select(Book), author, title).order_by(Book.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        return self.session.exec(stmt).all()

    def count_matching(self, author: Optional[str] = None, title: Optional[str] = None) -> int:
        stmt = self._search_stmt(select(func.count()).select_from(Book), author, title)
        return self.session.exec(stmt).one()
