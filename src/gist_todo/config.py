# src/gist_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets at import time (the GitHub token lives in the token file, not in env).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_GIST_DESCRIPTION = "TodoCLI Task List"
DEFAULT_GIST_FILENAME = "todolist.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _default_data_dir() -> Path:
    base = os.getenv("XDG_DATA_HOME")
    root = Path(base).expanduser() if base else Path.home() / ".local" / "share"
    return root / "gist-todo"


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    tasks_db_path: Path
    token_path: Path
    auth_cache_path: Path

    # ---- Auth ----
    auth_cache_ttl_seconds: int

    # ---- GitHub / remote document ----
    github_api_url: str
    gist_description: str
    gist_filename: str
    http_timeout_seconds: float

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "gist-todo")
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), _default_data_dir())
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        token_path = _env_path(_k("TOKEN_PATH"), data_dir / "token")
        auth_cache_path = _env_path(_k("AUTH_CACHE_PATH"), data_dir / "auth_cache.json")

        auth_cache_ttl_seconds = max(1, _env_int(_k("AUTH_CACHE_TTL_SECONDS"), 3600))

        github_api_url = _env(_k("GITHUB_API_URL"), "https://api.github.com").rstrip("/")
        gist_description = _env(_k("GIST_DESCRIPTION"), DEFAULT_GIST_DESCRIPTION)
        gist_filename = _env(_k("GIST_FILENAME"), DEFAULT_GIST_FILENAME)

        # 1s floor.
        http_timeout_seconds = max(1.0, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 30.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            token_path=token_path,
            auth_cache_path=auth_cache_path,
            auth_cache_ttl_seconds=auth_cache_ttl_seconds,
            github_api_url=github_api_url,
            gist_description=gist_description,
            gist_filename=gist_filename,
            http_timeout_seconds=http_timeout_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
