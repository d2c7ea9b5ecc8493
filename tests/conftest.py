"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path so we can import app, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from fastapi.testclient import TestClient  # noqa: E402

from api.dependencies import get_meal_repository, get_user_repository  # noqa: E402
from main import app  # noqa: E402
from test_fixtures import (  # noqa: E402
    InMemoryMealRepository,
    InMemoryUserRepository,
    auth_headers,
    make_user,
)


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def meals(users):
    return InMemoryMealRepository(users=users)


@pytest.fixture
def admin(users):
    return users.add(make_user("admin"))


@pytest.fixture
def regular_user(users):
    return users.add(make_user("user"))


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin.id)


@pytest.fixture
def client(users, meals):
    """
    TestClient with the store replaced by in-memory repositories.

    Server exceptions are rendered as responses so 500 envelopes can be asserted.
    The lifespan is not entered, so no MongoDB connection is attempted.
    """
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_meal_repository] = lambda: meals
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
