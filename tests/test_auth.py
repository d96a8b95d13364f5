# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# Tests for sign-up, sign-in and token-protected endpoints.
# The welcome email task runs eagerly (CELERY_TASK_ALWAYS_EAGER) or is mocked.
# =============================================================================

from datetime import timedelta
from unittest.mock import patch

from core.database.entities import RoleName
from core.repositories import UserRepository
from lib.security import create_access_token, verify_password
from tests.conftest import register_and_sign_in


def _signup(client, **overrides):
    payload = {
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret123",
    }
    payload.update(overrides)
    return client.post("/api/auth/signup", json=payload)


# =============================================================================
# Sign-up
# =============================================================================

class TestSignup:
    """Tests for POST /api/auth/signup."""

    def test_signup_success(self, client, session):
        response = _signup(client)

        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully!"}

        user = UserRepository(session).find_by_username("alice")
        assert user is not None
        assert user.password != "secret123"
        assert verify_password("secret123", user.password)
        assert user.role_names == [RoleName.ROLE_USER.value]

    def test_signup_with_roles(self, client, session):
        response = _signup(client, roles=["mod", "user"])

        assert response.status_code == 201
        user = UserRepository(session).find_by_username("alice")
        assert sorted(user.role_names) == ["ROLE_MODERATOR", "ROLE_USER"]

    def test_signup_unknown_role(self, client):
        response = _signup(client, roles=["superuser"])

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"

    def test_signup_duplicate_username(self, client):
        _signup(client)

        response = _signup(client, email="other@example.com")

        assert response.status_code == 409
        assert response.json()["detail"] == "User already exists with username alice"

    def test_signup_duplicate_email(self, client):
        _signup(client)

        response = _signup(client, username="alice2")

        assert response.status_code == 409
        assert response.json()["details"]["field"] == "email"

    def test_signup_invalid_email(self, client):
        response = _signup(client, email="not-an-email")

        assert response.status_code == 400
        assert "email" in response.json()["details"]["errors"]

    def test_signup_short_password(self, client):
        response = _signup(client, password="123")

        assert response.status_code == 400
        assert "password" in response.json()["details"]["errors"]

    def test_signup_queues_welcome_email(self, client, session):
        with patch("workers.tasks.send_welcome_email.delay") as mock_delay:
            _signup(client)

        user = UserRepository(session).find_by_username("alice")
        mock_delay.assert_called_once_with(user.id, "alice", "alice@example.com")

    def test_signup_survives_broker_outage(self, client):
        with patch("workers.tasks.send_welcome_email.delay", side_effect=ConnectionError("broker down")):
            response = _signup(client)

        assert response.status_code == 201


# =============================================================================
# Sign-in
# =============================================================================

class TestSignin:
    """Tests for POST /api/auth/signin."""

    def test_signin_success(self, client):
        body = register_and_sign_in(client, "alice", roles=["admin"])

        assert body["type"] == "Bearer"
        assert body["id"] == 1
        assert body["username"] == "alice"
        assert body["email"] == "alice@example.com"
        assert body["roles"] == ["ROLE_ADMIN"]
        assert body["token"]

    def test_signin_wrong_password(self, client):
        _signup(client)

        response = client.post("/api/auth/signin", json={"username": "alice", "password": "wrong-pass"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["detail"] == "Invalid username or password"

    def test_signin_unknown_user(self, client):
        response = client.post("/api/auth/signin", json={"username": "nobody", "password": "secret123"})

        assert response.status_code == 401


# =============================================================================
# Token-protected endpoints
# =============================================================================

class TestCurrentUser:
    """Tests for /api/auth/me and /api/auth/verify."""

    def test_me(self, client, user_headers):
        response = client.get("/api/auth/me", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {
            "id": 1,
            "username": "reader",
            "email": "reader@example.com",
            "roles": ["ROLE_USER"],
        }

    def test_verify(self, client, user_headers):
        response = client.get("/api/auth/verify", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["valid"] is True

    def test_me_without_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401

    def test_expired_token(self, client):
        register_and_sign_in(client, "alice")
        token = create_access_token("alice", user_id=1, roles=["ROLE_USER"], expires_delta=timedelta(seconds=-10))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_token_for_deleted_user(self, client):
        token = create_access_token("ghost", user_id=7, roles=["ROLE_USER"])

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token: user not found"
