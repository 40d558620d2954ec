# src/gist_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the sync engine and the CLI.

The engine depends on Protocols instead of concrete implementations, so the
gist client and the SQLite store can be swapped for in-memory fakes in tests.
"""

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import Task


class RemoteDocumentClient(Protocol):
    """
    Remote task document. Failures are raised as RemoteError whose kind is
    NOT_FOUND, NETWORK_ERROR, SERVER_ERROR, DECODE_ERROR or AUTH_REQUIRED.
    """

    async def fetch_tasks(self, credential: str) -> list[Task]: ...
    async def create_document(self, credential: str, tasks: Iterable[Task]) -> None: ...
    async def update_document(self, credential: str, tasks: Iterable[Task]) -> None: ...


class CredentialProvider(Protocol):
    def is_authenticated(self) -> bool: ...
    def get_credential(self) -> str | None: ...


class TaskRepo(Protocol):
    # Sync engine API
    def list_tasks(self) -> list[Task]: ...
    def replace_all(self, tasks: Iterable[Task]) -> None: ...

    # CLI API
    def add_task(self, description: str) -> Task: ...
    def complete_task(self, prefix: str) -> Task: ...
    def remove_task(self, prefix: str) -> Task: ...
    def complete_all(self) -> int: ...
    def remove_all(self) -> int: ...
