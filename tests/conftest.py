# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from gist_todo.auth.manager import AuthManager
from gist_todo.auth.token_storage import FileTokenStorage
from gist_todo.auth.validation_cache import ValidationCache
from gist_todo.core.state import AppState
from gist_todo.sync.engine import SyncManager
from gist_todo.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeGitHubAuthClient, FakeRemote

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="gist-todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        token_path=tmp_path / "token",
        auth_cache_path=tmp_path / "auth_cache.json",
        auth_cache_ttl_seconds=3600,
        github_api_url="https://api.github.test",
        gist_description="TodoCLI Task List",
        gist_filename="todolist.json",
        http_timeout_seconds=5.0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(1_000_000.0)


@pytest.fixture()
def github() -> FakeGitHubAuthClient:
    return FakeGitHubAuthClient()


@pytest.fixture()
def auth(settings: SimpleNamespace, github: FakeGitHubAuthClient, clock: FakeClock) -> AuthManager:
    return AuthManager(
        FileTokenStorage(settings.token_path),
        github,  # type: ignore[arg-type]
        ValidationCache(settings.auth_cache_path, clock=clock, ttl_seconds=settings.auth_cache_ttl_seconds),
    )


@pytest.fixture()
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, auth: AuthManager, remote: FakeRemote) -> AppState:
    """
    AppState wired with fakes for the network side.

    The SQLite store is real: its behaviour is part of what we test.
    """
    return AppState(
        settings=settings,
        task_store=store,
        auth=auth,
        sync=SyncManager(auth, remote, store),
    )
