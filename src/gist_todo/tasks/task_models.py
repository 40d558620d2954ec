# src/gist_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum

from ..errors import InvalidArgumentError


class TaskStatus(StrEnum):
    """
    Task status.

    Values are the exact strings used in the remote document ("Pending"/"Completed"),
    so other clients of the same gist can read what we write.
    """

    PENDING = "Pending"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        """Strict parse; returns None for anything unknown."""
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    description: str
    status: TaskStatus
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise InvalidArgumentError("Task id cannot be empty.")
        if not self.description or not self.description.strip():
            raise InvalidArgumentError("Task description cannot be empty.")

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @property
    def short_id(self) -> str:
        return self.id[:3]

    def with_status(self, status: TaskStatus) -> Task:
        # created_at is the merge key and stays as is.
        return replace(self, status=status)
