# =============================================================================
# app/routers/books.py - Book CRUD Endpoints
# =============================================================================
# Database-backed books under /api/books.
# Reads are public; writes need a signed-in user; delete needs ROLE_ADMIN.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlmodel import Session

from app.auth import AuthUser, get_current_user, require_roles
from core.database import get_session
from core.models.book import BookCreate, BookPage, BookResponse, BookUpdate
from core.services.book_service import BookService

router = APIRouter()

BookId = Annotated[int, Path(description="Book id")]


def get_book_service(session: Session = Depends(get_session)) -> BookService:
    return BookService(session)


@router.get("", response_model=BookPage)
def list_books(
    service: BookService = Depends(get_book_service),
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    size: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
    author: Annotated[str | None, Query(description="Exact author name")] = None,
    title: Annotated[str | None, Query(description="Part of the title (case-insensitive)")] = None,
):
    """
    List books with pagination.

    Filter by author and/or a fragment of the title.
    """
    return service.list_books(page=page, size=size, author=author, title=title)


@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: BookId, service: BookService = Depends(get_book_service)):
    """Get a book by id."""
    return service.get_book(book_id)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(
    request: BookCreate,
    service: BookService = Depends(get_book_service),
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a book.

    Raises:
        409: If the isbn is already used
    """
    return service.create_book(request)


@router.put("/{book_id}", response_model=BookResponse)
def update_book(
    book_id: BookId,
    request: BookUpdate,
    service: BookService = Depends(get_book_service),
    user: AuthUser = Depends(get_current_user),
):
    """Replace a book's fields."""
    return service.update_book(book_id, request)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles("ROLE_ADMIN"))],
)
def delete_book(book_id: BookId, service: BookService = Depends(get_book_service)):
    """Delete a book (admins only)."""
    service.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
