# src/gist_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..auth.manager import AuthManager
from ..sync.engine import SyncManager
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (config.Settings in the app, SimpleNamespace in tests).
    settings: Any

    task_store: TaskStore
    auth: AuthManager
    sync: SyncManager
