# =============================================================================
# core/database/entities/books.py - Book Table
# =============================================================================

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class Book(Base, table=True):
    """Entity for the book catalogue.

    Table: books
    """

    __tablename__ = "books"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200, index=True)
    author: str = Field(max_length=100, index=True)
    isbn: str = Field(max_length=13, unique=True, index=True)
    price: float = Field(default=0.0)
    published_year: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Book(id={self.id}, isbn={self.isbn})"
