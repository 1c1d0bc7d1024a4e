"""Pytest configuration and fixtures for the test suite."""

import os
import sys
from pathlib import Path
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient, FlaskCliRunner

# Add the project root to the Python path first to avoid import issues
project_root = str(Path(__file__).parent.parent)
sys.path.insert(0, project_root)

# Set test environment variables before the config module is imported
os.environ.update(
    {
        "FLASK_ENV": "testing",
        "SECRET_KEY": "test-secret-key",
        "NUTRITIONIX_APP_ID": "",
        "NUTRITIONIX_API_KEY": "",
        "GEOCODE_API_KEY": "",
    }
)
os.environ.pop("DATABASE_URL", None)

from config import TestingConfig  # noqa: E402
from moodlog import create_app  # noqa: E402
from moodlog.auth.models import User, hash_password  # noqa: E402
from moodlog.extensions import db  # noqa: E402

TEST_USERNAME = "testuser_1"
TEST_PASSWORD = "testpass"  # nosec B105


@pytest.fixture(scope="function")
def app() -> Generator[Flask, None, None]:
    """Create and configure a new app instance for testing.

    Every test gets its own in-memory SQLite database. No application context
    is left pushed, so each request runs in a fresh one just like in production.
    """
    app = create_app(TestingConfig())

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_context(app: Flask) -> Generator[Flask, None, None]:
    """Push an application context for tests that call services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a test client for the application."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask) -> FlaskCliRunner:
    """Create a CLI runner for testing Click commands."""
    return app.test_cli_runner()


class AuthActions:
    """Helper class for authentication-related test actions."""

    def __init__(self, client: FlaskClient) -> None:
        self._client = client

    def register(self, username: str = TEST_USERNAME, password: str = TEST_PASSWORD):
        """Create an account through the create-account form."""
        return self._client.post("/create", data={"username": username, "password": password})

    def login(self, username: str = TEST_USERNAME, password: str = TEST_PASSWORD):
        """Log in through the login form."""
        return self._client.post("/login", data={"username": username, "password": password})

    def logout(self):
        """Log out the current user."""
        return self._client.get("/logout")


@pytest.fixture
def auth(client: FlaskClient) -> AuthActions:
    """Return an object with authentication methods for testing."""
    return AuthActions(client)


def create_user(app: Flask, username: str, password: str) -> User:
    """Create a user directly in the database and return it detached."""
    with app.app_context():
        user = User(username=username, password_hash=hash_password(password))
        db.session.add(user)
        db.session.commit()
        db.session.refresh(user)
        db.session.expunge(user)
    return user


@pytest.fixture
def test_user(app: Flask) -> User:
    """Create and return a test user with known credentials."""
    return create_user(app, TEST_USERNAME, TEST_PASSWORD)


@pytest.fixture
def test_user2(app: Flask) -> User:
    """Create and return a second test user for testing access control."""
    return create_user(app, "testuser_2", "testpass2")


@pytest.fixture
def logged_in_client(client: FlaskClient, auth: AuthActions, test_user: User) -> FlaskClient:
    """A test client whose session belongs to ``test_user``."""
    response = auth.login()
    assert response.status_code == 302
    return client
