"""Pytest fixtures for API tests.

The app runs its real lifespan against a per-test SQLite file, so these
tests need no external services.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from serveis.presentation.api.app import API_V1_PREFIX, create_app
from serveis.presentation.cli.app import create_admin
from serveis_config.settings import Settings

TEST_PASSWORD = "Secure#Pass1"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test settings: SQLite, fast bcrypt, no rate limiting."""
    return Settings(
        _env_file=None,
        jwt_access_secret=SecretStr("test-access-secret-for-testing-only"),
        jwt_refresh_secret=SecretStr("test-refresh-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        db_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        bcrypt_rounds=4,
        rate_limit_enabled=False,
        api_debug=True,
    )


@pytest.fixture
def test_client(api_settings):
    """A client whose lifespan has created the schema."""
    app = create_app(settings=api_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register_user(test_client, api_v1_prefix):
    """Register a user and return the response body."""

    def _register(
        email: str = "anna@example.com",
        role: str = "user",
        headers: dict | None = None,
        **extra,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/auth/register",
            headers=headers,
            json={
                "email": email,
                "password": TEST_PASSWORD,
                "name": "Anna",
                "role": role,
                **extra,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def login_user(test_client, api_v1_prefix):
    """Log a user in and return the response body."""

    def _login(email: str = "anna@example.com", password: str = TEST_PASSWORD):
        response = test_client.post(
            f"{api_v1_prefix}/auth/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest.fixture
def auth_headers(register_user, login_user) -> dict:
    """Get auth headers for a freshly registered regular user."""
    register_user()
    token = login_user()["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(test_client, api_settings, login_user) -> dict:
    """Get auth headers for an admin created out of band, as in production."""
    asyncio.run(
        create_admin(api_settings, "admin@example.com", TEST_PASSWORD, "Admin"),
    )
    token = login_user(email="admin@example.com")["accessToken"]
    return {"Authorization": f"Bearer {token}"}
