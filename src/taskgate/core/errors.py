# src/taskgate/core/errors.py

"""
Error kinds reported by the core.

Each kind is a distinct class so the presentation layer can map it to its own
response. Use cases return these inside an Outcome; entities raise them.
"""

from __future__ import annotations


class TaskGateError(Exception):
    """Base class for all errors reported by the core."""


class ValidationError(TaskGateError):
    """Malformed input (e.g. empty title). Detected before any authorization check."""


class UnauthorizedError(TaskGateError):
    """
    The active authorization strategy denied the action.

    The message is always the same generic text: it must not reveal which
    strategy was applied or why it said no.
    """

    def __init__(self) -> None:
        super().__init__("Not authorized to perform this action.")


class NotFoundError(TaskGateError):
    def __init__(self, task_id: int | None) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class InvalidStateError(TaskGateError):
    """Illegal lifecycle transition (e.g. completing an already completed task)."""

    def __init__(self, task_id: int | None, status: str) -> None:
        super().__init__(f"Task {task_id} is already {status}.")
        self.task_id = task_id
        self.status = status
