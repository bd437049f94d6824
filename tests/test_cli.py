"""Smoke tests for the CLI, with the HTTP layer patched out."""

import io
import json
import urllib.error
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from newsdesk.api.token import TokenStore
from newsdesk.cli import app


def _response(payload: object) -> MagicMock:
    mock_response = MagicMock()
    mock_response.read.return_value = json.dumps(payload).encode()
    mock_response.__enter__ = lambda s: s
    mock_response.__exit__ = MagicMock(return_value=False)
    return mock_response


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("NEWSDESK_API_URL", "NEWSDESK_TIMEOUT", "NEWSDESK_CREDENTIALS", "NEWSDESK_PAGE_SIZE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def credentials(tmp_path: Path) -> Path:
    return tmp_path / "credentials.json"


@pytest.fixture
def config_file(tmp_path: Path, credentials: Path) -> Path:
    path = tmp_path / ".newsdesk.toml"
    path.write_text(
        '[api]\nurl = "https://news.example/api"\n'
        f'[auth]\ncredentials_file = "{credentials.as_posix()}"\n'
    )
    return path


@pytest.fixture
def logged_in(credentials: Path) -> TokenStore:
    store = TokenStore(credentials)
    store.set("tok-123")
    return store


class TestCLI:
    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "articles" in result.output
        assert "settings" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "newsdesk 0.1.0" in result.output

    def test_requires_login(self, runner: CliRunner, config_file: Path) -> None:
        with patch("urllib.request.urlopen") as mock_urlopen:
            result = runner.invoke(app, ["--config", str(config_file), "articles", "list"])

        assert result.exit_code == 1
        assert "Not logged in" in result.output
        mock_urlopen.assert_not_called()


class TestLoginCommand:
    def test_login_stores_token(self, runner: CliRunner, config_file: Path, credentials: Path) -> None:
        payload = {
            "token": "fresh",
            "user": {"id": 1, "username": "admin", "email": "admin@x.io", "role": "admin"},
        }
        with patch("urllib.request.urlopen", return_value=_response(payload)) as mock_urlopen:
            result = runner.invoke(
                app,
                ["--config", str(config_file), "login", "admin@x.io", "--password", "secret"],
            )

        assert result.exit_code == 0, result.output
        assert "Logged in as admin" in result.output
        req = mock_urlopen.call_args[0][0]
        assert req.full_url == "https://news.example/api/auth/login"
        assert json.loads(req.data) == {"email": "admin@x.io", "password": "secret"}
        assert TokenStore(credentials).get() == "fresh"

    def test_login_failure(self, runner: CliRunner, config_file: Path) -> None:
        error = urllib.error.HTTPError(
            "https://news.example/api/auth/login", 401, "Unauthorized", {}, io.BytesIO(b"{}")
        )
        with patch("urllib.request.urlopen", side_effect=error):
            result = runner.invoke(
                app, ["--config", str(config_file), "login", "admin", "--password", "bad"]
            )

        assert result.exit_code == 1
        assert "Invalid username/email or password" in result.output

    def test_logout(self, runner: CliRunner, config_file: Path, logged_in: TokenStore) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "logout"])
        assert result.exit_code == 0
        assert not logged_in.is_authenticated


class TestArticleCommands:
    def test_list(self, runner: CliRunner, config_file: Path, logged_in: TokenStore) -> None:
        payload = {
            "articles": [{"id": 7, "title": "Hello", "status": "published", "views": 3}],
            "total": 1,
            "page": 1,
            "limit": 10,
        }
        with patch("urllib.request.urlopen", return_value=_response(payload)) as mock_urlopen:
            result = runner.invoke(
                app, ["--config", str(config_file), "articles", "list", "--status", "published"]
            )

        assert result.exit_code == 0, result.output
        assert "Hello" in result.output
        assert "Showing 1 to 1 of 1 articles" in result.output
        req = mock_urlopen.call_args[0][0]
        assert req.full_url == "https://news.example/api/articles?page=1&limit=10&status=published"

    def test_delete_cancelled(self, runner: CliRunner, config_file: Path, logged_in: TokenStore) -> None:
        with patch("urllib.request.urlopen") as mock_urlopen:
            result = runner.invoke(
                app, ["--config", str(config_file), "articles", "delete", "5"], input="n\n"
            )

        assert result.exit_code == 0
        assert "Deleted" not in result.output
        mock_urlopen.assert_not_called()

    def test_delete_with_yes(self, runner: CliRunner, config_file: Path, logged_in: TokenStore) -> None:
        with patch("urllib.request.urlopen", return_value=_response({"message": "ok"})) as mock_urlopen:
            result = runner.invoke(
                app, ["--config", str(config_file), "articles", "delete", "5", "--yes"]
            )

        assert result.exit_code == 0, result.output
        assert "Deleted article #5" in result.output
        req = mock_urlopen.call_args_list[0][0][0]
        assert req.method == "DELETE"
        assert req.full_url == "https://news.example/api/articles/5"


class TestCommentCommands:
    def test_set_status_backend_error(
        self, runner: CliRunner, config_file: Path, logged_in: TokenStore
    ) -> None:
        error = urllib.error.HTTPError(
            "https://news.example/api/comments/3",
            404,
            "Not Found",
            {},
            io.BytesIO(b'{"error": "Comment not found"}'),
        )
        with patch("urllib.request.urlopen", side_effect=error):
            result = runner.invoke(
                app, ["--config", str(config_file), "comments", "set-status", "3", "approved"]
            )

        assert result.exit_code == 1
        assert "Comment not found" in result.output


class TestSettingsCommands:
    def test_set_rejects_bad_assignment(
        self, runner: CliRunner, config_file: Path, logged_in: TokenStore
    ) -> None:
        settings = {"site_name": {"value": "Daily", "type": "text", "description": ""}}
        with patch("urllib.request.urlopen", return_value=_response(settings)):
            result = runner.invoke(
                app, ["--config", str(config_file), "settings", "set", "site_name"]
            )

        assert result.exit_code == 1
        assert "Expected KEY=VALUE" in result.output
