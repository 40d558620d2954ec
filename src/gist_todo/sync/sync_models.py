# src/gist_todo/sync/sync_models.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ErrorKind
from ..tasks.task_models import Task


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """Result of one synchronize() call. Not persisted."""

    success: bool
    message: str
    tasks_synced: int = 0
    conflicts_resolved: int = 0
    error_kind: ErrorKind | None = None

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> SyncOutcome:
        return cls(success=False, message=message, error_kind=kind)


@dataclass(slots=True)
class MergeResult:
    tasks: list[Task] = field(default_factory=list)
    conflicts_resolved: int = 0
    local_only: int = 0
    remote_only: int = 0
