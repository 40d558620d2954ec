# src/gist_todo/sync/engine.py

"""
Synchronization engine.

One call reconciles the local store with the remote document:

1. no credential                  -> fail with AUTH_REQUIRED, touch nothing
2. fetch remote
   - NOT_FOUND                    -> create the document from the local set (bootstrap, no merge)
   - any other failure            -> fail, local state untouched
3. merge local + remote by id     (remote wins when remote.created_at >= local.created_at)
4. replace the local set with the merged set
5. overwrite the remote document with the merged set
   (if this fails, step 4 is NOT rolled back)

Known limitations (other clients write the same gist in the same format):
- there are no tombstones: a task deleted locally but still present remotely
  comes back on the next sync;
- created_at is the only merge key: completing a task does not refresh it, so an
  older local completion loses to a newer remote pending copy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.ports import CredentialProvider, RemoteDocumentClient, TaskRepo
from ..errors import ErrorKind, RemoteError
from ..tasks.task_models import Task
from .sync_models import MergeResult, SyncOutcome

logger = logging.getLogger(__name__)


def _index_by_id(tasks: Iterable[Task], side: str) -> dict[str, Task]:
    out: dict[str, Task] = {}
    for t in tasks:
        if t.id in out:
            logger.warning("Duplicate %s task id=%s; keeping the first one", side, t.id)
            continue
        out[t.id] = t
    return out


def _differs(local: Task, remote: Task) -> bool:
    return (
        local.created_at != remote.created_at
        or local.description != remote.description
        or local.status != remote.status
    )


def merge_tasks(local: Iterable[Task], remote: Iterable[Task]) -> MergeResult:
    """
    Merge two task sets by id.

    Order of the result: local ids in local order, then remote-only ids in
    remote order.
    """
    local_by_id = _index_by_id(local, "local")
    remote_by_id = _index_by_id(remote, "remote")
    result = MergeResult()

    for task_id, local_task in local_by_id.items():
        remote_task = remote_by_id.get(task_id)
        if remote_task is None:
            result.tasks.append(local_task)
            result.local_only += 1
            continue

        # Equal timestamps -> remote wins.
        use_remote = remote_task.created_at >= local_task.created_at
        if _differs(local_task, remote_task):
            result.conflicts_resolved += 1
            logger.debug("Conflict id=%s -> %s wins", task_id, "remote" if use_remote else "local")
        result.tasks.append(remote_task if use_remote else local_task)

    for task_id, remote_task in remote_by_id.items():
        if task_id not in local_by_id:
            result.tasks.append(remote_task)
            result.remote_only += 1

    return result


async def synchronize(
    store: TaskRepo,
    remote: RemoteDocumentClient,
    credential: str | None,
) -> SyncOutcome:
    if not credential:
        return SyncOutcome.failed(
            ErrorKind.AUTH_REQUIRED, "Authentication required. Please run auth setup first."
        )

    local_tasks = store.list_tasks()

    try:
        remote_tasks = await remote.fetch_tasks(credential)
    except RemoteError as e:
        if e.kind != ErrorKind.NOT_FOUND:
            logger.warning("Fetching remote tasks failed kind=%s: %s", e.kind, e)
            return SyncOutcome.failed(e.kind, f"Failed to fetch remote tasks: {e}")

        logger.info("No remote document yet; creating it with %d local tasks", len(local_tasks))
        try:
            await remote.create_document(credential, local_tasks)
        except RemoteError as create_err:
            logger.warning("Creating remote document failed kind=%s: %s", create_err.kind, create_err)
            return SyncOutcome.failed(create_err.kind, f"Failed to create remote gist: {create_err}")

        return SyncOutcome(
            success=True,
            message="Created remote gist with local tasks.",
            tasks_synced=len(local_tasks),
            conflicts_resolved=0,
        )

    merged = merge_tasks(local_tasks, remote_tasks)
    logger.info(
        "Merged local=%d remote=%d -> %d tasks (conflicts=%d, local_only=%d, remote_only=%d)",
        len(local_tasks),
        len(remote_tasks),
        len(merged.tasks),
        merged.conflicts_resolved,
        merged.local_only,
        merged.remote_only,
    )

    store.replace_all(merged.tasks)

    try:
        await remote.update_document(credential, merged.tasks)
    except RemoteError as e:
        logger.warning("Updating remote document failed kind=%s: %s (local already replaced)", e.kind, e)
        return SyncOutcome.failed(e.kind, f"Failed to update remote gist: {e}")

    return SyncOutcome(
        success=True,
        message="Synchronization completed successfully.",
        tasks_synced=len(merged.tasks),
        conflicts_resolved=merged.conflicts_resolved,
    )


class SyncManager:
    """Binds the engine to a credential provider, a remote client and the local store."""

    def __init__(self, auth: CredentialProvider, remote: RemoteDocumentClient, store: TaskRepo) -> None:
        self._auth = auth
        self._remote = remote
        self._store = store

    async def sync(self, credential: str | None = None) -> SyncOutcome:
        """
        Run one synchronization. `credential` is a token the caller has just
        validated; without it the provider's cached credential is used.
        """
        token = credential if credential is not None else self._auth.get_credential()
        return await synchronize(self._store, self._remote, token)
