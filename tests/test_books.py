# =============================================================================
# tests/test_books.py - Book Endpoint and Service Tests
# =============================================================================
# Tests for /api/books:
# - CRUD with JWT-protected writes and admin-only delete
# - Pagination and filters
# - Duplicate isbn and validation errors
# - Read-through caching and eviction in BookService
# =============================================================================

import pytest

from app.exceptions import DuplicateResourceError, ResourceNotFoundError
from core.database.entities import Book
from core.models.book import BookCreate, BookUpdate
from core.services.book_service import BOOK_LISTS_CACHE, BOOKS_CACHE, BookService
from lib.cache import cache_prefix, get_cache


def _create(client, headers, **overrides):
    payload = {
        "title": "Dune",
        "author": "Frank Herbert",
        "isbn": "9780441013593",
        "price": 9.99,
    }
    payload.update(overrides)
    response = client.post("/api/books", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# API Tests
# =============================================================================

class TestBookEndpoints:
    """CRUD through the HTTP API."""

    def test_create_book(self, client, user_headers, book_payload):
        response = client.post("/api/books", json=book_payload, headers=user_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["isbn"] == "9780132350884"
        assert body["published_year"] == 2008
        assert body["created_at"] is not None

    def test_create_requires_token(self, client, book_payload):
        response = client.post("/api/books", json=book_payload)

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_create_rejects_bad_token(self, client, book_payload):
        response = client.post(
            "/api/books",
            json=book_payload,
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401

    def test_create_duplicate_isbn(self, client, user_headers, book_payload):
        client.post("/api/books", json=book_payload, headers=user_headers)

        response = client.post("/api/books", json=book_payload, headers=user_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_RESOURCE"

    def test_create_invalid_isbn(self, client, user_headers, book_payload):
        book_payload["isbn"] = "12345"

        response = client.post("/api/books", json=book_payload, headers=user_headers)

        assert response.status_code == 400
        assert "isbn" in response.json()["details"]["errors"]

    def test_get_book(self, client, user_headers):
        created = _create(client, user_headers)

        response = client.get(f"/api/books/{created['id']}")

        assert response.status_code == 200
        assert response.json()["title"] == "Dune"

    def test_get_missing_book(self, client):
        response = client.get("/api/books/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Book not found with id 999"

    def test_zero_id_not_found(self, client):
        response = client.get("/api/books/0")

        assert response.status_code == 404
        assert response.json()["detail"] == "Book not found with id 0"

    def test_list_is_public_and_paginated(self, client, user_headers):
        _create(client, user_headers, title="Dune", isbn="9780441013593")
        _create(client, user_headers, title="Dune Messiah", isbn="9780441172696")
        _create(client, user_headers, title="Children of Dune", isbn="9780441104024")

        response = client.get("/api/books", params={"page": 2, "size": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3
        assert body["page"] == 2
        assert body["size"] == 2
        assert [b["title"] for b in body["items"]] == ["Children of Dune"]

    def test_list_filters(self, client, user_headers):
        _create(client, user_headers, title="Dune", isbn="9780441013593")
        _create(client, user_headers, title="Emma", author="Jane Austen", isbn="9780141439587")

        by_author = client.get("/api/books", params={"author": "Jane Austen"}).json()
        by_title = client.get("/api/books", params={"title": "dUN"}).json()

        assert [b["title"] for b in by_author["items"]] == ["Emma"]
        assert [b["title"] for b in by_title["items"]] == ["Dune"]

    def test_list_sees_new_books(self, client, user_headers):
        assert client.get("/api/books").json()["total"] == 0

        _create(client, user_headers)

        assert client.get("/api/books").json()["total"] == 1

    def test_update_book(self, client, user_headers):
        created = _create(client, user_headers)

        response = client.put(
            f"/api/books/{created['id']}",
            json={"title": "Dune (Deluxe)", "author": "Frank Herbert", "isbn": "9780441013593", "price": 30},
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Dune (Deluxe)"
        assert client.get(f"/api/books/{created['id']}").json()["price"] == 30

    def test_update_to_taken_isbn(self, client, user_headers):
        _create(client, user_headers, isbn="9780441013593")
        second = _create(client, user_headers, title="Emma", isbn="9780141439587")

        response = client.put(
            f"/api/books/{second['id']}",
            json={"title": "Emma", "author": "Jane Austen", "isbn": "9780441013593"},
            headers=user_headers,
        )

        assert response.status_code == 409

    def test_update_missing_book(self, client, user_headers, book_payload):
        response = client.put("/api/books/999", json=book_payload, headers=user_headers)

        assert response.status_code == 404

    def test_delete_requires_admin(self, client, user_headers):
        created = _create(client, user_headers)

        response = client.delete(f"/api/books/{created['id']}", headers=user_headers)

        assert response.status_code == 403

    def test_delete_as_admin(self, client, user_headers, admin_headers):
        created = _create(client, user_headers)

        response = client.delete(f"/api/books/{created['id']}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get(f"/api/books/{created['id']}").status_code == 404

    def test_delete_missing_book(self, client, admin_headers):
        assert client.delete("/api/books/999", headers=admin_headers).status_code == 404


# =============================================================================
# Service / Caching Tests
# =============================================================================

class TestBookServiceCaching:
    """Caching behaviour of BookService."""

    @pytest.fixture
    def service(self, session):
        return BookService(session)

    @pytest.fixture
    def book(self, service, book_payload):
        return service.create_book(BookCreate(**book_payload))

    def test_get_book_is_cached(self, service, session, book):
        service.get_book(book.id)

        # Change the row behind the cache's back
        entity = session.get(Book, book.id)
        entity.title = "Changed directly"
        session.add(entity)
        session.commit()

        assert service.get_book(book.id).title == "Clean Code"
        assert get_cache().get(f"{cache_prefix(BOOKS_CACHE)}{book.id}") is not None

    def test_update_refreshes_cached_book(self, service, book, book_payload):
        service.get_book(book.id)

        book_payload["title"] = "Clean Code, 2nd Edition"
        service.update_book(book.id, BookUpdate(**book_payload))

        assert service.get_book(book.id).title == "Clean Code, 2nd Edition"

    def test_delete_evicts_cached_book(self, service, book):
        service.get_book(book.id)

        service.delete_book(book.id)

        with pytest.raises(ResourceNotFoundError):
            service.get_book(book.id)

    def test_write_evicts_list_cache(self, service, book):
        assert service.list_books().total == 1
        assert get_cache().delete_prefix(cache_prefix(BOOK_LISTS_CACHE)) == 1

        service.list_books()
        service.create_book(BookCreate(title="Emma", author="Jane Austen", isbn="9780141439587"))

        assert service.list_books().total == 2

    def test_failed_write_keeps_cache(self, service, book, book_payload):
        service.list_books()

        with pytest.raises(DuplicateResourceError):
            service.create_book(BookCreate(**book_payload))

        assert get_cache().get(f"{cache_prefix(BOOK_LISTS_CACHE)}SimpleKey.EMPTY") is not None

    def test_missing_book_not_cached(self, service):
        with pytest.raises(ResourceNotFoundError):
            service.get_book(404)

        assert get_cache().get(f"{cache_prefix(BOOKS_CACHE)}404") is None

    def test_count_books(self, service, book):
        assert service.count_books() == 1
