# =============================================================================
# core/services/book_service.py - Book Business Logic
# =============================================================================
# Handles book CRUD on top of BookRepository.
#
# Caching:
#   books       single book by id    (read-through, refreshed on update)
#   book_lists  listing pages        (evicted on every write)
# =============================================================================

import logging

from sqlmodel import Session

from app.exceptions import DuplicateResourceError, ResourceNotFoundError
from core.database.base import utc_now
from core.database.entities import Book
from core.models.book import BookCreate, BookPage, BookResponse, BookUpdate
from core.repositories import BookRepository
from lib.cache import cache_evict, cache_put, cacheable

logger = logging.getLogger(__name__)

BOOKS_CACHE = "books"
BOOK_LISTS_CACHE = "book_lists"


class BookService:
    """
    Service for book management operations.

    Provides a clean interface between API routes and database.
    """

    def __init__(self, session: Session):
        self.repository = BookRepository(session)

    def _get_entity(self, book_id: int) -> Book:
        book = self.repository.find_by_id(book_id)
        if book is None:
            raise ResourceNotFoundError("Book", "id", book_id)
        return book

    @cacheable(BOOK_LISTS_CACHE, model=BookPage)
    def list_books(
        self,
        page: int = 1,
        size: int = 20,
        author: str | None = None,
        title: str | None = None,
    ) -> BookPage:
        """
        List books, optionally filtered by author and title fragment.

        Args:
            page: 1-based page number
            size: Items per page
            author: Exact author match
            title: Case-insensitive substring of the title

        Returns:
            BookPage with items and total count
        """
        books = self.repository.search(
            author=author,
            title=title,
            limit=size,
            offset=(page - 1) * size,
        )
        total = self.repository.count_matching(author=author, title=title)

        return BookPage(
            items=[BookResponse.model_validate(book) for book in books],
            total=total,
            page=page,
            size=size,
        )

    @cacheable(BOOKS_CACHE, model=BookResponse, key=lambda self, book_id: book_id)
    def get_book(self, book_id: int) -> BookResponse:
        """
        Get a book by id.

        Raises:
            ResourceNotFoundError: If the book doesn't exist
        """
        return BookResponse.model_validate(self._get_entity(book_id))

    @cache_evict(BOOK_LISTS_CACHE, all_entries=True)
    def create_book(self, data: BookCreate) -> BookResponse:
        """
        Create a book.

        Raises:
            DuplicateResourceError: If the isbn is already used
        """
        if self.repository.exists_by_isbn(data.isbn):
            raise DuplicateResourceError("Book", "isbn", data.isbn)

        book = self.repository.save(Book(**data.model_dump()))
        logger.info(f"Created book {book.id}: {book.title}")
        return BookResponse.model_validate(book)

    @cache_evict(BOOK_LISTS_CACHE, all_entries=True)
    @cache_put(BOOKS_CACHE, model=BookResponse, key=lambda self, book_id, data: book_id)
    def update_book(self, book_id: int, data: BookUpdate) -> BookResponse:
        """
        Replace the fields of an existing book.

        Raises:
            ResourceNotFoundError: If the book doesn't exist
            DuplicateResourceError: If the new isbn belongs to another book
        """
        book = self._get_entity(book_id)

        other = self.repository.find_by_isbn(data.isbn)
        if other is not None and other.id != book_id:
            raise DuplicateResourceError("Book", "isbn", data.isbn)

        for field, value in data.model_dump().items():
            setattr(book, field, value)
        book.updated_at = utc_now()

        book = self.repository.save(book)
        logger.info(f"Updated book {book_id}")
        return BookResponse.model_validate(book)

    @cache_evict(BOOK_LISTS_CACHE, all_entries=True)
    @cache_evict(BOOKS_CACHE, key=lambda self, book_id: book_id)
    def delete_book(self, book_id: int) -> None:
        """
        Delete a book.

        Raises:
            ResourceNotFoundError: If the book doesn't exist
        """
        self.repository.delete(self._get_entity(book_id))
        logger.info(f"Deleted book {book_id}")

    def count_books(self) -> int:
        return self.repository.count()
