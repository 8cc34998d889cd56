# tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from ..core.errors import NotFoundError
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store (implements the TaskRepo port).

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    - save() is one transaction, so readers never see a half-written row
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'pending',
                    created_by TEXT,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL,
                    completed_at REAL
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

            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("status", "TEXT NOT NULL DEFAULT 'pending'")
            add_col("created_by", "TEXT")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")
            add_col("completed_at", "REAL")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status, created_at)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            status=TaskStatus.from_db(row["status"]),
            created_by=row["created_by"],
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
            completed_at=float(row["completed_at"]) if row["completed_at"] is not None else None,
        )

    @staticmethod
    def _select_by_id(cur: sqlite3.Cursor, task_id: int) -> sqlite3.Row | None:
        cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
        return cur.fetchone()

    # ---- TaskRepo port ----

    def save(self, task: Task) -> Task:
        """
        Insert a new task (id is None) or update the mutable fields of an existing one.

        Returns the row as stored. Raises NotFoundError when updating an id
        that is not in the table.
        """
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            if task.id is None:
                cur.execute(
                    """
                    INSERT INTO tasks(
                        title, description, status, created_by,
                        created_at, updated_at, completed_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        task.title,
                        task.description,
                        task.status.value,
                        task.created_by,
                        float(task.created_at),
                        float(task.updated_at),
                        task.completed_at,
                    ),
                )
                rowid = cur.lastrowid
                if rowid is None:
                    raise RuntimeError("SQLite did not return lastrowid for tasks insert")
                task_id = int(rowid)
            else:
                task_id = int(task.id)
                cur.execute(
                    """
                    UPDATE tasks
                    SET title = ?,
                        description = ?,
                        status = ?,
                        updated_at = ?,
                        completed_at = ?
                    WHERE id = ?
                    """,
                    (
                        task.title,
                        task.description,
                        task.status.value,
                        float(task.updated_at or time.time()),
                        task.completed_at,
                        task_id,
                    ),
                )
                if cur.rowcount != 1:
                    conn.rollback()
                    raise NotFoundError(task_id)

            row = self._select_by_id(cur, task_id)
            conn.commit()
        finally:
            conn.close()

        if row is None:
            raise RuntimeError(f"Task row vanished after save id={task_id}")

        saved = self._row_to_task(row)
        logger.debug("Task saved id=%s status=%s", saved.id, saved.status.value)
        return saved

    def find(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            row = self._select_by_id(conn.cursor(), task_id)
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    # ---- console helpers (not part of the port) ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def list_tasks(self, *, status: TaskStatus | None = None, limit: int = 32) -> list[Task]:
        """Most recent first, optionally filtered by status."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            if status is None:
                cur.execute(
                    "SELECT * FROM tasks ORDER BY created_at DESC, id DESC LIMIT ?",
                    (int(limit),),
                )
            else:
                cur.execute(
                    """
                    SELECT *
                    FROM tasks
                    WHERE status = ?
                    ORDER BY created_at DESC, id DESC
                        LIMIT ?
                    """,
                    (status.value, int(limit)),
                )
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()
