"""
Tests for the Supabase store operations.

Store failures must come back as None / False / [] / default config,
never as exceptions.
"""

import asyncio
from datetime import datetime
from unittest.mock import patch

import bcrypt

from zealthy.db.client import (
    create_user,
    get_all_users,
    get_onboarding_config,
    get_user_by_email,
    update_onboarding_config,
    update_user,
)
from zealthy.models import ComponentType

USER_ROW = {
    "id": "user-1",
    "email": "jane@example.com",
    "password_hash": "$2b$04$placeholder",
    "current_step": 1,
    "completed": False,
}


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


def _table(mock_supabase):
    return mock_supabase.table.return_value


class TestCreateUser:

    def test_stores_bcrypt_hash(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [USER_ROW]

        user = _run(create_user("jane@example.com", "secret123"))

        assert user.id == "user-1"
        mock_supabase.table.assert_called_with("users")
        inserted = _table(mock_supabase).insert.call_args.args[0]
        assert "password" not in inserted
        assert inserted["email"] == "jane@example.com"
        assert bcrypt.checkpw(b"secret123", inserted["password_hash"].encode())

    def test_failure_returns_none(self, mock_supabase):
        _table(mock_supabase).execute.side_effect = RuntimeError("duplicate key")
        assert _run(create_user("jane@example.com", "secret123")) is None

    def test_unhashable_password_returns_none(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [USER_ROW]

        with patch("zealthy.db.client.bcrypt.hashpw", side_effect=ValueError("password too long")):
            assert _run(create_user("jane@example.com", "x" * 80)) is None
        _table(mock_supabase).insert.assert_not_called()


class TestGetUserByEmail:

    def test_found(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [USER_ROW]

        user = _run(get_user_by_email("jane@example.com"))

        assert user.email == "jane@example.com"
        _table(mock_supabase).eq.assert_called_with("email", "jane@example.com")

    def test_missing(self, mock_supabase):
        assert _run(get_user_by_email("nobody@example.com")) is None

    def test_failure_returns_none(self, mock_supabase):
        _table(mock_supabase).execute.side_effect = RuntimeError("network down")
        assert _run(get_user_by_email("jane@example.com")) is None

    def test_malformed_row_returns_none(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [{**USER_ROW, "birthdate": "not-a-date"}]
        assert _run(get_user_by_email("jane@example.com")) is None

    def test_password_hash_not_serialized(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [USER_ROW]
        user = _run(get_user_by_email("jane@example.com"))
        assert user.password_hash
        assert "password_hash" not in user.model_dump()


class TestUpdateUser:

    def test_stamps_updated_at(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [{**USER_ROW, "current_step": 2}]

        user = _run(update_user("user-1", {"current_step": 2}))

        assert user.current_step == 2
        updates = _table(mock_supabase).update.call_args.args[0]
        assert updates["current_step"] == 2
        assert "updated_at" in updates
        assert datetime.fromisoformat(updates["updated_at"]).tzinfo is not None
        _table(mock_supabase).eq.assert_called_with("id", "user-1")

    def test_no_row_returns_none(self, mock_supabase):
        assert _run(update_user("missing", {"current_step": 2})) is None

    def test_malformed_row_returns_none(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [{**USER_ROW, "current_step": 7}]
        assert _run(update_user("user-1", {"current_step": 7})) is None

    def test_failure_returns_none(self, mock_supabase):
        _table(mock_supabase).execute.side_effect = RuntimeError("boom")
        assert _run(update_user("user-1", {"current_step": 2})) is None


class TestGetAllUsers:

    def test_newest_first(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [
            {**USER_ROW, "id": "user-2", "email": "b@example.com"},
            USER_ROW,
        ]

        users = _run(get_all_users())

        assert [u.id for u in users] == ["user-2", "user-1"]
        _table(mock_supabase).order.assert_called_with("created_at", desc=True)

    def test_failure_returns_empty(self, mock_supabase):
        _table(mock_supabase).execute.side_effect = RuntimeError("boom")
        assert _run(get_all_users()) == []


class TestGetOnboardingConfig:

    def test_groups_rows_by_page(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [
            {"id": "c1", "page_number": 2, "component_name": "about_me"},
            {"id": "c2", "page_number": 2, "component_name": "birthdate"},
            {"id": "c3", "page_number": 3, "component_name": "address"},
        ]

        config = _run(get_onboarding_config())

        assert config == {
            2: [ComponentType.ABOUT_ME, ComponentType.BIRTHDATE],
            3: [ComponentType.ADDRESS],
        }

    def test_backfills_empty_pages(self, mock_supabase):
        _table(mock_supabase).execute.return_value.data = [
            {"id": "c1", "page_number": 3, "component_name": "birthdate"},
        ]

        config = _run(get_onboarding_config())

        assert config == {
            2: [ComponentType.ABOUT_ME],
            3: [ComponentType.BIRTHDATE],
        }

    def test_empty_table_gives_defaults(self, mock_supabase):
        config = _run(get_onboarding_config())
        assert config == {2: [ComponentType.ABOUT_ME], 3: [ComponentType.ADDRESS]}

    def test_failure_gives_defaults(self, mock_supabase):
        _table(mock_supabase).execute.side_effect = RuntimeError("boom")
        config = _run(get_onboarding_config())
        assert config == {2: [ComponentType.ABOUT_ME], 3: [ComponentType.ADDRESS]}


class TestUpdateOnboardingConfig:

    def test_deletes_then_inserts(self, mock_supabase):
        ok = _run(update_onboarding_config({
            2: [ComponentType.ABOUT_ME],
            3: [ComponentType.ADDRESS, ComponentType.BIRTHDATE],
        }))

        assert ok
        table = _table(mock_supabase)
        table.delete.assert_called_once()
        table.insert.assert_called_once_with([
            {"page_number": 2, "component_name": "about_me"},
            {"page_number": 3, "component_name": "address"},
            {"page_number": 3, "component_name": "birthdate"},
        ])

    def test_failure_returns_false(self, mock_supabase):
        _table(mock_supabase).execute.side_effect = RuntimeError("boom")
        assert _run(update_onboarding_config({2: ["about_me"], 3: ["address"]})) is False
