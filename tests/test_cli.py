"""Tests for the typer CLI."""

from unittest.mock import patch

from typer.testing import CliRunner

from zealthy.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.stdout


def test_config(fake_db):
    result = runner.invoke(app, ["config"])

    assert result.exit_code == 0
    assert "About Me" in result.stdout
    assert "Address Information" in result.stdout
    assert "Available Components" in result.stdout


def test_users(fake_db, make_user):
    fake_db.get_all_users.return_value = [make_user(current_step=2)]

    result = runner.invoke(app, ["users"])

    assert result.exit_code == 0
    assert "jane@example.com" in result.stdout
    assert "Completion rate: 0%" in result.stdout


def test_users_empty(fake_db):
    result = runner.invoke(app, ["users"])
    assert "No users yet." in result.stdout


def test_serve_reloads_in_development(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    with patch("uvicorn.run") as run:
        result = runner.invoke(app, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    run.assert_called_once()
    assert run.call_args.kwargs["port"] == 9000
    assert run.call_args.kwargs["reload"] is True


def test_serve_no_reload_flag(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    with patch("uvicorn.run") as run:
        result = runner.invoke(app, ["serve", "--no-reload"])

    assert result.exit_code == 0
    assert run.call_args.kwargs["reload"] is False
