# src/gist_todo/remote/document.py

"""
Remote document wire format.

The gist file holds a JSON array of objects:

    {"hash": "...", "description": "...", "status": "Pending"|"Completed",
     "createdAt": "<ISO-8601>"}

Decoding is lenient per entry: a malformed entry is dropped (and logged) instead
of failing the whole document. Only a payload that is not a JSON array at all is
a DecodeError.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from ..errors import ErrorKind, RemoteError
from ..tasks.task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

# Other clients write up to 7 fractional digits (e.g. .NET "O" format).
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(raw: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken as local time of this machine.
    """
    text = _FRACTION_RE.sub(r"\1", raw.strip())
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def format_timestamp(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(UTC).isoformat()


def task_to_dict(task: Task) -> dict[str, str]:
    return {
        "hash": task.id,
        "description": task.description,
        "status": task.status.value,
        "createdAt": format_timestamp(task.created_at),
    }


def task_from_dict(data: Any) -> Task | None:
    """Build a Task from one wire entry, or None if the entry is unusable."""
    if not isinstance(data, dict):
        return None

    task_id = data.get("hash")
    description = data.get("description")
    status_raw = data.get("status")
    status = TaskStatus.parse(status_raw) if isinstance(status_raw, str) else None
    created_raw = data.get("createdAt")

    if not isinstance(task_id, str) or not task_id.strip():
        return None
    if not isinstance(description, str) or not description.strip():
        return None
    if status is None or not isinstance(created_raw, str):
        return None

    # 0001-01-01 with a positive offset has no UTC value; such entries are dropped here.
    try:
        created_at = parse_timestamp(created_raw).astimezone(UTC)
    except (ValueError, OverflowError):
        return None

    return Task(id=task_id, description=description, status=status, created_at=created_at)


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False, indent=2)


def decode_tasks(content: str | None) -> list[Task]:
    """
    Decode the gist file content.

    Empty content means an empty list. Entries with a duplicate hash keep the
    first occurrence.
    """
    if content is None or not content.strip():
        return []

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise RemoteError(ErrorKind.DECODE_ERROR, f"Remote task list is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise RemoteError(ErrorKind.DECODE_ERROR, "Remote task list is not a JSON array.")

    out: list[Task] = []
    seen: set[str] = set()
    for index, entry in enumerate(data):
        task = task_from_dict(entry)
        if task is None:
            logger.warning("Skipping malformed remote task entry #%d", index)
            continue
        if task.id in seen:
            logger.warning("Skipping duplicate remote task id=%s", task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out
