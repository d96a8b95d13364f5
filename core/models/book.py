# =============================================================================
# core/models/book.py - Book Schemas (DTOs)
# =============================================================================
# These models define the API contract for /api/books:
# - BookCreate: Input for creating a book
# - BookUpdate: Input for replacing a book (same rules as create)
# - BookResponse: Output returned to clients (and stored in the cache)
# - BookPage: One page of a book listing
#
# The ORM table lives in core/database/entities/books.py; these schemas
# never leak the table model out of the service layer.
# =============================================================================

from datetime import datetime
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

ISBN_PATTERN = re.compile(r"(?:[0-9]{10}|[0-9]{13})")


class BookBase(BaseModel):
    """Fields shared by create and update requests."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Book title"
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author name"
    )

    # Hyphens are accepted on input and stripped before storage
    isbn: str = Field(
        ...,
        description="ISBN-10 or ISBN-13, digits only once normalized"
    )

    price: float = Field(
        default=0.0,
        ge=0,
        description="Retail price"
    )

    published_year: int | None = Field(
        default=None,
        ge=1450,
        le=2100,
        description="Year of first publication"
    )

    @field_validator("title", "author")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("isbn")
    @classmethod
    def normalize_isbn(cls, v: str) -> str:
        digits = v.replace("-", "").replace(" ", "")
        if not ISBN_PATTERN.fullmatch(digits):
            raise ValueError("isbn must contain 10 or 13 digits")
        return digits


class BookCreate(BookBase):
    """
    Schema for creating a book.

    Example:
        {
            "title": "Clean Code",
            "author": "Robert C. Martin",
            "isbn": "978-0132350884",
            "price": 37.99,
            "published_year": 2008
        }
    """


class BookUpdate(BookBase):
    """Schema for replacing a book (PUT semantics)."""


class BookResponse(BaseModel):
    """Schema for returning book data to clients."""

    id: int
    title: str
    author: str
    isbn: str
    price: float
    published_year: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class BookPage(BaseModel):
    """One page of a book listing."""

    items: list[BookResponse]
    total: int
    page: int
    size: int
