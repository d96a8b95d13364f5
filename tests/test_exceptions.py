# =============================================================================
# tests/test_exceptions.py - Error Handling Tests
# =============================================================================
# Tests for the exception hierarchy and the JSON error handlers:
#   404 not found, 409 duplicate, 400 validation, 401, 500 unexpected
# =============================================================================

from unittest.mock import patch

from fastapi.testclient import TestClient

from app.exceptions import (
    BadRequestError,
    DemoProjectException,
    DuplicateResourceError,
    ResourceNotFoundError,
    UnauthorizedError,
)
from app.main import app


class TestExceptionTypes:
    """Exception attributes and serialization."""

    def test_not_found(self):
        exc = ResourceNotFoundError("Book", "id", 5)

        assert exc.status_code == 404
        assert exc.to_dict() == {
            "detail": "Book not found with id 5",
            "code": "RESOURCE_NOT_FOUND",
            "suggestion": "Check that the book id is correct",
            "details": {"resource": "Book", "field": "id", "value": 5},
        }

    def test_duplicate(self):
        exc = DuplicateResourceError("User", "email", "a@b.co")

        assert exc.status_code == 409
        assert str(exc) == "User already exists with email a@b.co"

    def test_bad_request_without_extras(self):
        assert BadRequestError("Nope").to_dict() == {"detail": "Nope", "code": "BAD_REQUEST"}

    def test_unauthorized_default_message(self):
        assert UnauthorizedError().message == "Invalid username or password"

    def test_hierarchy(self):
        assert issubclass(ResourceNotFoundError, DemoProjectException)
        assert issubclass(UnauthorizedError, DemoProjectException)


class TestErrorHandlers:
    """Handlers registered on the application."""

    def test_validation_error_shape(self, client):
        response = client.post("/todos", json={"title": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        assert body["code"] == "VALIDATION_ERROR"
        assert set(body["details"]["errors"]) == {"title"}

    def test_malformed_json_body(self, client):
        response = client.post(
            "/todos",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    def test_unexpected_error_is_500(self, product_service, todo_service):
        with patch.object(product_service, "list_products", side_effect=RuntimeError("boom")):
            with TestClient(app, raise_server_exceptions=False) as test_client:
                response = test_client.get("/products")

        assert response.status_code == 500
        assert response.json() == {
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }

    def test_unknown_route_is_404(self, client):
        assert client.get("/no/such/route").status_code == 404
