# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from gist_todo.auth.auth_models import TokenValidation
from gist_todo.errors import ErrorKind, RemoteError
from gist_todo.tasks.task_models import Task


class FakeClock:
    """Callable clock for ValidationCache; advance() moves time forward."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass(slots=True)
class FakeRemote:
    """
    In-memory RemoteDocumentClient.

    - tasks=None means "no remote document yet" (fetch raises NOT_FOUND)
    - *_error, when set, is raised by the matching call
    - every call is recorded for assertions
    """

    tasks: list[Task] | None = None
    fetch_error: RemoteError | None = None
    create_error: RemoteError | None = None
    update_error: RemoteError | None = None

    fetch_calls: list[str] = field(default_factory=list)
    created: list[list[Task]] = field(default_factory=list)
    updated: list[list[Task]] = field(default_factory=list)

    async def fetch_tasks(self, credential: str) -> list[Task]:
        self.fetch_calls.append(credential)
        if self.fetch_error is not None:
            raise self.fetch_error
        if self.tasks is None:
            raise RemoteError(ErrorKind.NOT_FOUND, "TodoCLI gist not found")
        return list(self.tasks)

    async def create_document(self, credential: str, tasks: Iterable[Task]) -> None:
        items = list(tasks)
        self.created.append(items)
        if self.create_error is not None:
            raise self.create_error
        self.tasks = items

    async def update_document(self, credential: str, tasks: Iterable[Task]) -> None:
        items = list(tasks)
        self.updated.append(items)
        if self.update_error is not None:
            raise self.update_error
        self.tasks = items


class FakeGitHubAuthClient:
    """Returns a preset TokenValidation and records which tokens were checked."""

    def __init__(self, result: TokenValidation | None = None) -> None:
        self.result = result or TokenValidation.ok()
        self.calls: list[str] = []

    async def validate_token(self, token: str) -> TokenValidation:
        self.calls.append(token)
        return self.result
