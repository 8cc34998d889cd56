# tasks/task_models.py

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from ..core.errors import InvalidStateError


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Transitions are one-way: pending -> completed.
    """

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.PENDING
        return cls(raw)


@dataclass(slots=True)
class Task:
    id: int | None
    title: str
    description: str
    status: TaskStatus

    created_by: str | None
    created_at: float
    updated_at: float
    completed_at: float | None = None

    @classmethod
    def new(cls, title: str, description: str = "", *, created_by: str | None = None) -> Task:
        """Build an unsaved pending task (id is assigned by the store on first save)."""
        now = time.time()
        return cls(
            id=None,
            title=title.strip(),
            description=description.strip(),
            status=TaskStatus.PENDING,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    def mark_complete(self, now: float | None = None) -> None:
        """
        Move the task to `completed`.

        Raises InvalidStateError if it is already completed; the task is left untouched.
        """
        if self.is_completed:
            raise InvalidStateError(self.id, self.status.value)

        ts = time.time() if now is None else float(now)
        self.status = TaskStatus.COMPLETED
        self.completed_at = ts
        self.updated_at = ts


def _labels(values: Iterable[str] | None) -> frozenset[str]:
    if not values:
        return frozenset()
    return frozenset(v.strip() for v in values if v and v.strip())


@dataclass(frozen=True, slots=True)
class Actor:
    """
    Identity on whose behalf an operation is attempted.

    Supplied by the authentication layer; the core only reads it.
    """

    user_id: str | None = None
    roles: frozenset[str] = frozenset()
    permissions: frozenset[str] = frozenset()

    @classmethod
    def from_labels(
        cls,
        user_id: str | None,
        roles: Iterable[str] | None = None,
        permissions: Iterable[str] | None = None,
    ) -> Actor:
        uid = (user_id or "").strip() or None
        return cls(user_id=uid, roles=_labels(roles), permissions=_labels(permissions))

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions
