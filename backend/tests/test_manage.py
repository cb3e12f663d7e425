"""Management CLI — table bootstrap, user creation and token issuance."""

import uuid

import pytest
from typer.testing import CliRunner

from monthly_data.config import get_settings
from monthly_data.infrastructure.auth_tokens import decode_access_token
from monthly_data.manage import app

runner = CliRunner()


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()
    yield url
    get_settings.cache_clear()


def test_create_user_and_issue_token(database_url):
    assert runner.invoke(app, ["create-tables"]).exit_code == 0

    result = runner.invoke(
        app, ["create-user", "-u", "root", "-e", "root@example.com", "-r", "admin"],
    )
    assert result.exit_code == 0
    user_id = uuid.UUID(result.stdout.strip())

    result = runner.invoke(app, ["issue-token", "-u", "root"])
    assert result.exit_code == 0
    assert decode_access_token(result.stdout.strip()) == user_id


def test_duplicate_user_fails(database_url):
    runner.invoke(app, ["create-tables"])
    runner.invoke(app, ["create-user", "-u", "root", "-e", "root@example.com"])
    result = runner.invoke(app, ["create-user", "-u", "root", "-e", "other@example.com"])
    assert result.exit_code == 1


def test_issue_token_for_unknown_user_fails(database_url):
    runner.invoke(app, ["create-tables"])
    result = runner.invoke(app, ["issue-token", "-u", "ghost"])
    assert result.exit_code == 1
