# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from gist_todo.config import DEFAULT_GIST_DESCRIPTION, DEFAULT_GIST_FILENAME, Settings

_VARS = (
    "TODO_DATA_DIR",
    "TODO_TASKS_DB_PATH",
    "TODO_TOKEN_PATH",
    "TODO_AUTH_CACHE_PATH",
    "TODO_AUTH_CACHE_TTL_SECONDS",
    "TODO_GITHUB_API_URL",
    "TODO_GIST_DESCRIPTION",
    "TODO_GIST_FILENAME",
    "TODO_HTTP_TIMEOUT_SECONDS",
    "TODO_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_derive_paths_from_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.token_path == tmp_path / "token"
    assert s.auth_cache_path == tmp_path / "auth_cache.json"
    assert s.gist_description == DEFAULT_GIST_DESCRIPTION
    assert s.gist_filename == DEFAULT_GIST_FILENAME
    assert s.github_api_url == "https://api.github.com"
    assert s.http_timeout_seconds == 30.0
    assert s.auth_cache_ttl_seconds == 3600
    assert s.log_level == "WARNING"


def test_overrides_and_bad_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_GITHUB_API_URL", "https://ghe.example.test/api/v3/")
    monkeypatch.setenv("TODO_GIST_FILENAME", "tasks.json")
    monkeypatch.setenv("TODO_HTTP_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("TODO_AUTH_CACHE_TTL_SECONDS", "not-a-number")

    s = Settings.from_env()

    assert s.github_api_url == "https://ghe.example.test/api/v3"
    assert s.gist_filename == "tasks.json"
    assert s.http_timeout_seconds == 1.0
    assert s.auth_cache_ttl_seconds == 3600


def test_cache_ttl_has_a_one_second_floor(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_AUTH_CACHE_TTL_SECONDS", "0")

    assert Settings.from_env().auth_cache_ttl_seconds == 1
