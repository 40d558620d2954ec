# src/gist_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires concrete implementations (SQLite store, gist client, auth) into AppState.
"""

from __future__ import annotations

import logging
from typing import Any

from ..auth.github_client import GitHubAuthClient
from ..auth.manager import AuthManager
from ..auth.token_storage import FileTokenStorage
from ..auth.validation_cache import ValidationCache
from ..config import get_settings
from ..core.state import AppState
from ..remote.gist_client import GistClient
from ..sync.engine import SyncManager
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Any) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.token_path.parent.mkdir(parents=True, exist_ok=True)
    settings.auth_cache_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings: Any = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    task_store = TaskStore(settings.tasks_db_path)
    auth = AuthManager(
        FileTokenStorage(settings.token_path),
        GitHubAuthClient.from_settings(settings),
        ValidationCache(settings.auth_cache_path, ttl_seconds=settings.auth_cache_ttl_seconds),
    )
    remote = GistClient.from_settings(settings)

    logger.debug("State wired data_dir=%s", settings.data_dir)
    return AppState(
        settings=settings,
        task_store=task_store,
        auth=auth,
        sync=SyncManager(auth, remote, task_store),
    )
