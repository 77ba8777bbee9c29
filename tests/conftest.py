"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from todo_api.config import Settings
from todo_api.database import Database
from todo_api.main import create_app
from todo_api.services.auth import Authenticator, build_password_context
from todo_api.services.credential_store import CredentialStore
from todo_api.services.tokens import TokenService

TEST_PASSWORD = "testpass123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


def register_user(
    client: TestClient, email: str, name: str = "Test User", password: str = TEST_PASSWORD
) -> AuthHeaders:
    """Register a user through the API and return bearer headers for it."""
    response = client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def settings():
    """Settings for an in-memory database and cheap password hashing."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret="test-secret",  # noqa: S106
        bcrypt_rounds=4,
        environment="test",
        cors_origins=[],
    )


@pytest.fixture
def database(settings):
    """Open a fresh in-memory database for each test."""
    database = Database(settings.database_url)
    database.open()
    database.create_all()
    yield database
    database.close()


@pytest.fixture
def db(database):
    """Create a database session for direct setup and assertions."""
    session = database.session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def app(settings, database):
    """Create an application bound to the test database."""
    return create_app(settings, database)


@pytest.fixture
def client(app):
    """Create a test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_service(settings):
    return TokenService.from_settings(settings)


@pytest.fixture
def store(db):
    return CredentialStore(db)


@pytest.fixture
def authenticator(store, token_service, settings):
    return Authenticator(store, token_service, build_password_context(settings.bcrypt_rounds))


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_user(client, "test@example.com")


@pytest.fixture
def make_user(client):
    """Return a helper that registers additional users."""

    def _make_user(email: str, name: str = "Test User", password: str = TEST_PASSWORD):
        return register_user(client, email, name=name, password=password)

    return _make_user
