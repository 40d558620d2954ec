# src/gist_todo/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from ..errors import InvalidArgumentError
from .ids import generate_id, resolve_prefix
from .task_models import Task, TaskStatus, utc_now

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Rows keep insertion order through the `seq` column; `id` is the task id.
    Each method opens its own SQLite connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.debug("TaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    description TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'Pending',
                    created_at TEXT NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("status", "TEXT NOT NULL DEFAULT 'Pending'")
            add_col("created_at", "TEXT NOT NULL DEFAULT '1970-01-01T00:00:00+00:00'")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            description=str(row["description"]),
            status=TaskStatus.parse(row["status"]) or TaskStatus.PENDING,
            created_at=datetime.fromisoformat(str(row["created_at"])),
        )

    @staticmethod
    def _task_params(task: Task) -> tuple[str, str, str, str]:
        return (task.id, task.description, task.status.value, task.created_at.isoformat())

    def _all_ids(self, conn: sqlite3.Connection) -> list[str]:
        cur = conn.execute("SELECT id FROM tasks ORDER BY seq ASC")
        return [str(r["id"]) for r in cur.fetchall()]

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(self, description: str) -> Task:
        if not description or not description.strip():
            raise InvalidArgumentError("Description cannot be empty.")

        conn = self._get_conn()
        try:
            existing = set(self._all_ids(conn))
            task_id = generate_id()
            while task_id in existing:
                task_id = generate_id()

            task = Task(
                id=task_id,
                description=description.strip(),
                status=TaskStatus.PENDING,
                created_at=utc_now(),
            )
            conn.execute(
                "INSERT INTO tasks(id, description, status, created_at) VALUES (?, ?, ?, ?)",
                self._task_params(task),
            )
            conn.commit()
            logger.debug("Task added id=%s", task.id)
            return task
        finally:
            conn.close()

    def list_tasks(self) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT * FROM tasks ORDER BY seq ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def get_task(self, task_id: str) -> Task | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def complete_task(self, prefix: str) -> Task:
        """Mark the task identified by `prefix` as completed and return it."""
        conn = self._get_conn()
        try:
            task_id = resolve_prefix(prefix, self._all_ids(conn))
            conn.execute(
                "UPDATE tasks SET status = ? WHERE id = ?",
                (TaskStatus.COMPLETED.value, task_id),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
            logger.debug("Task completed id=%s", task_id)
            return self._row_to_task(row)
        finally:
            conn.close()

    def remove_task(self, prefix: str) -> Task:
        """Delete the task identified by `prefix` and return what was removed."""
        conn = self._get_conn()
        try:
            task_id = resolve_prefix(prefix, self._all_ids(conn))
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
            conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            conn.commit()
            logger.debug("Task removed id=%s", task_id)
            return self._row_to_task(row)
        finally:
            conn.close()

    def complete_all(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE tasks SET status = ? WHERE status = ?",
                (TaskStatus.COMPLETED.value, TaskStatus.PENDING.value),
            )
            conn.commit()
            return int(cur.rowcount)
        finally:
            conn.close()

    def remove_all(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks")
            conn.commit()
            return int(cur.rowcount)
        finally:
            conn.close()

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """
        Replace the whole collection in one transaction.

        Readers see either the old set or the new one, never a mix.
        """
        items = list(tasks)
        seen: set[str] = set()
        for t in items:
            if t.id in seen:
                raise InvalidArgumentError(f"Duplicate task id in replacement set: {t.id}")
            seen.add(t.id)

        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM tasks")
                conn.executemany(
                    "INSERT INTO tasks(id, description, status, created_at) VALUES (?, ?, ?, ?)",
                    [self._task_params(t) for t in items],
                )
            logger.debug("TaskStore replaced contents: %d tasks", len(items))
        finally:
            conn.close()
