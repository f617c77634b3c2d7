"""
Pytest configuration and fixtures for Zealthy tests.
"""

import os
from contextlib import ExitStack
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import bcrypt
import pytest

# Set test environment before importing zealthy modules
os.environ["ZEALTHY_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-key-not-real")

from zealthy.models import ComponentType, User


TEST_PASSWORD = "secret123"

# Low cost factor keeps hashing fast in tests
TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()

STORE_OPERATIONS = [
    "create_user",
    "get_user_by_email",
    "update_user",
    "get_all_users",
    "get_onboarding_config",
    "update_onboarding_config",
]


def build_user(**overrides) -> User:
    """Build a User record with sensible defaults."""
    data = {
        "id": "user-1",
        "email": "jane@example.com",
        "password_hash": TEST_PASSWORD_HASH,
        "current_step": 1,
        "completed": False,
        "created_at": "2026-10-01T12:00:00+00:00",
        "updated_at": "2026-10-01T12:00:00+00:00",
    }
    data.update(overrides)
    return User(**data)


@pytest.fixture
def make_user():
    """Factory for User records."""
    return build_user


@pytest.fixture
def default_config():
    """Page config: About Me on page 2, Address on page 3."""
    return {2: [ComponentType.ABOUT_ME], 3: [ComponentType.ADDRESS]}


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    for method in ("select", "insert", "update", "delete", "eq", "neq", "order", "limit"):
        getattr(mock_table, method).return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    with patch("zealthy.db.client.get_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def fake_db(default_config):
    """Replace every store operation with an AsyncMock."""
    with ExitStack() as stack:
        mocks = {
            name: stack.enter_context(patch(f"zealthy.db.client.{name}", new_callable=AsyncMock))
            for name in STORE_OPERATIONS
        }
        mocks["get_onboarding_config"].return_value = default_config
        mocks["get_all_users"].return_value = []
        mocks["update_onboarding_config"].return_value = True
        yield SimpleNamespace(**mocks)


@pytest.fixture
def client():
    """FastAPI test client."""
    from fastapi.testclient import TestClient
    from zealthy.web.app import app

    return TestClient(app)
