"""Tests for config.py: NewsdeskConfig, TOML loading, env and CLI overrides."""

from pathlib import Path

import pytest

from newsdesk.config import NewsdeskConfig, load_config, merge_cli_overrides


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove env vars that _apply_env_vars reads so tests see TOML values."""
    for key in (
        "NEWSDESK_API_URL",
        "NEWSDESK_TIMEOUT",
        "NEWSDESK_CREDENTIALS",
        "NEWSDESK_PAGE_SIZE",
    ):
        monkeypatch.delenv(key, raising=False)


class TestNewsdeskConfigDefaults:
    def test_default_api(self):
        cfg = NewsdeskConfig()
        assert cfg.api.url == "http://localhost:9988/api"
        assert cfg.api.timeout == 30
        assert cfg.api.retries == 1

    def test_default_page_size(self):
        assert NewsdeskConfig().articles.page_size == 10

    def test_credentials_path_expands_home(self):
        cfg = NewsdeskConfig()
        cfg.auth.credentials_file = "~/creds.json"
        assert cfg.credentials_path == Path.home() / "creds.json"


class TestLoadConfig:
    def test_load_from_explicit_path(self, tmp_path):
        toml_path = tmp_path / ".newsdesk.toml"
        toml_path.write_text('[api]\nurl = "https://news.example/api"\ntimeout = 5\n')
        cfg = load_config(toml_path)
        assert cfg.api.url == "https://news.example/api"
        assert cfg.api.timeout == 5

    def test_load_missing_path_returns_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg.api.url == "http://localhost:9988/api"

    def test_load_searches_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".newsdesk.toml").write_text("[articles]\npage_size = 25\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
        cfg = load_config()
        assert cfg.articles.page_size == 25

    def test_invalid_toml_returns_defaults(self, tmp_path):
        toml_path = tmp_path / "bad.toml"
        toml_path.write_text("[api\nurl = ")
        cfg = load_config(toml_path)
        assert cfg.api.timeout == 30


class TestEnvVars:
    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        toml_path = tmp_path / ".newsdesk.toml"
        toml_path.write_text('[api]\nurl = "https://from-toml/api"\n')
        monkeypatch.setenv("NEWSDESK_API_URL", "https://from-env/api")
        monkeypatch.setenv("NEWSDESK_PAGE_SIZE", "50")
        cfg = load_config(toml_path)
        assert cfg.api.url == "https://from-env/api"
        assert cfg.articles.page_size == 50

    def test_bad_integer_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NEWSDESK_TIMEOUT", "soon")
        cfg = load_config(tmp_path / "none.toml")
        assert cfg.api.timeout == 30


class TestMergeCliOverrides:
    def test_explicit_flags_win(self):
        cfg = merge_cli_overrides(NewsdeskConfig(), api_url="https://cli/api", page_size=3)
        assert cfg.api.url == "https://cli/api"
        assert cfg.articles.page_size == 3

    def test_none_and_unknown_ignored(self):
        cfg = merge_cli_overrides(NewsdeskConfig(), api_url=None, colour="red")
        assert cfg.api.url == "http://localhost:9988/api"
