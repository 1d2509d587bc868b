# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.permissions import RoleAccess, reset_role_access
from core.roles import DEFAULT_ROLE_TABLE
from dependencies.auth import CurrentUser, get_current_user
from models.enums import Role


def make_user(role: Role, user_id: str = None) -> CurrentUser:
    return CurrentUser(
        id=user_id or f"{role.value}-user-id",
        email=f"{role.value}@example.com",
        role=role,
        name=role.value.title(),
    )


def make_profile(user_id: str, role: str, email: str = None) -> dict:
    return {
        "id": user_id,
        "email": email or f"{user_id}@example.com",
        "name": user_id,
        "role": role,
        "role_level": DEFAULT_ROLE_TABLE.level(role),
        "team_id": None,
        "created_at": "2026-01-01T00:00:00+00:00",
    }


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def access() -> RoleAccess:
    return RoleAccess(DEFAULT_ROLE_TABLE)


@pytest.fixture
def login_as(app):
    """
    Make every request run as a user with the given role.
        login_as(Role.admin)
    """
    def _login(role: Role, user_id: str = None) -> CurrentUser:
        user = make_user(role, user_id)
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


@pytest.fixture(autouse=True)
def reset_shared_role_access():
    """Drop the cached engine before and after each test."""
    reset_role_access()
    yield
    reset_role_access()


@pytest.fixture
def profile_row():
    """Factory for users-table rows: profile_row("u1", "coach")."""
    return make_profile
