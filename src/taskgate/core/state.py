# src/taskgate/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..core.ports import TaskRepo
from ..tasks.task_models import Actor
from ..usecases import CompleteTask, CreateTask


class SessionActorSupplier:
    """
    ActorSupplier for a single interactive session.

    Starts with the actor configured in settings; `/as` swaps it.
    """

    def __init__(self, actor: Actor) -> None:
        self._actor = actor

    def current_actor(self) -> Actor:
        return self._actor

    def switch(self, actor: Actor) -> None:
        self._actor = actor


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskRepo
    actors: SessionActorSupplier
    create_task: CreateTask
    complete_task: CompleteTask

    # Serializes command handling when several connectors share the state.
    lock: threading.Lock = field(default_factory=threading.Lock)
