# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Resets the database, cache and in-memory stores for every test
# - Provides an API client and signed-in user helpers
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("REDIS_PUBSUB_ENABLED", "false")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.main import app
from core.database import engine, init_db
from core.services.product_service import ProductService, get_product_service
from core.services.todo_service import TodoService, get_todo_service
from lib.cache import get_cache


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_state():
    """Fresh tables, roles and an empty cache for every test."""
    SQLModel.metadata.drop_all(engine)
    init_db()
    get_cache().clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def session():
    """Database session bound to the test engine."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def product_service():
    """Freshly seeded product catalogue, shared by every request of a test."""
    service = ProductService()
    app.dependency_overrides[get_product_service] = lambda: service
    return service


@pytest.fixture
def todo_service():
    """Freshly seeded todo list, shared by every request of a test."""
    service = TodoService()
    app.dependency_overrides[get_todo_service] = lambda: service
    return service


@pytest.fixture
def client(product_service, todo_service):
    """API client with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


def register_and_sign_in(client: TestClient, username: str, roles: list[str] | None = None) -> dict:
    """Create a user through the API and return its sign-in response."""
    payload = {
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
    }
    if roles is not None:
        payload["roles"] = roles

    response = client.post("/api/auth/signup", json=payload)
    assert response.status_code == 201, response.text

    response = client.post("/api/auth/signin", json={"username": username, "password": "secret123"})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def user_headers(client):
    """Authorization header for a ROLE_USER account."""
    token = register_and_sign_in(client, "reader")["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    """Authorization header for a ROLE_ADMIN account."""
    token = register_and_sign_in(client, "admin", roles=["admin"])["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def book_payload():
    """Valid book creation body."""
    return {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0132350884",
        "price": 37.99,
        "published_year": 2008,
    }
