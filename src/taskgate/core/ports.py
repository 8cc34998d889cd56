# src/taskgate/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/identity providers and authorization rules swappable
and makes testing easier.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..tasks.task_models import Actor, Task


class TaskRepo(Protocol):
    """
    Persistence port for tasks.

    Implementations must make each save atomic (a concurrent find never sees a
    half-written record) and provide read-after-write for a single id.
    The core performs no caching and no retries: storage errors propagate.
    """

    def save(self, task: Task) -> Task:
        """
        Insert (task.id is None -> assign an id) or update the existing record.
        Returns the stored state.
        """
        ...

    def find(self, task_id: int) -> Task | None:
        """Return the stored task, or None if no record exists for this id."""
        ...


class ActorSupplier(Protocol):
    """Produces the Actor for the current call (authentication is not our concern)."""

    def current_actor(self) -> Actor: ...


@runtime_checkable
class AuthorizationStrategy(Protocol):
    """
    A single, swappable authorization rule.

    Contract:
    - pure, no side effects
    - never raises for well-formed input
    - actor or resource being None means "deny" (returns False)
    """

    def authorize(self, actor: Actor | None, resource: Any) -> bool: ...
