"""Unified configuration loaded from .newsdesk.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".newsdesk.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
    Path.home() / ".config" / "newsdesk",
]
DEFAULT_API_URL = "http://localhost:9988/api"
DEFAULT_CREDENTIALS_FILE = str(Path.home() / ".config" / "newsdesk" / "credentials.json")


class APISectionConfig(BaseModel):
    """[api] section."""

    url: str = DEFAULT_API_URL
    timeout: int = 30
    retries: int = 1


class AuthSectionConfig(BaseModel):
    """[auth] section."""

    credentials_file: str = DEFAULT_CREDENTIALS_FILE


class ArticlesSectionConfig(BaseModel):
    """[articles] section."""

    page_size: int = 10


class NewsdeskConfig(BaseModel):
    """Top-level configuration for the admin client."""

    api: APISectionConfig = Field(default_factory=APISectionConfig)
    auth: AuthSectionConfig = Field(default_factory=AuthSectionConfig)
    articles: ArticlesSectionConfig = Field(default_factory=ArticlesSectionConfig)

    @property
    def credentials_path(self) -> Path:
        return Path(self.auth.credentials_file).expanduser()


def load_config(path: str | Path | None = None) -> NewsdeskConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .newsdesk.toml in CWD
    3. ~/.config/newsdesk/.newsdesk.toml, then ~/.config/newsdesk/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged NewsdeskConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        global_config = Path.home() / ".config" / "newsdesk" / "config.toml"
        if not data and global_config.exists():
            data = _load_toml(global_config)
            logger.info("Loaded config from %s", global_config)

    config = NewsdeskConfig.model_validate(data) if data else NewsdeskConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: NewsdeskConfig, **cli_kwargs: object) -> NewsdeskConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "api_url": ("api", "url"),
        "timeout": ("api", "timeout"),
        "credentials_file": ("auth", "credentials_file"),
        "page_size": ("articles", "page_size"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = value

    return NewsdeskConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: NewsdeskConfig) -> NewsdeskConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "NEWSDESK_API_URL": ("api", "url"),
        "NEWSDESK_CREDENTIALS": ("auth", "credentials_file"),
    }
    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    # Integer env vars
    for env_var, (section, field) in {
        "NEWSDESK_TIMEOUT": ("api", "timeout"),
        "NEWSDESK_PAGE_SIZE": ("articles", "page_size"),
    }.items():
        raw = os.environ.get(env_var)
        if raw is None:
            continue
        try:
            data[section][field] = int(raw)
        except ValueError:
            logger.warning("Ignoring non-integer %s=%r", env_var, raw)

    return NewsdeskConfig.model_validate(data)
