# src/taskgate/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- parses the configured authorization rules into strategies,
- wires the SQLite store and the use cases into AppState.
"""

from __future__ import annotations

import logging

from ..auth.strategies import parse_strategy
from ..config import get_settings
from ..core.state import AppState, SessionActorSupplier
from ..tasks.task_models import Actor
from ..tasks.task_store import TaskStore
from ..usecases import CompleteTask, CreateTask

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def actor_from_settings(settings) -> Actor:
    return Actor.from_labels(
        getattr(settings, "actor_user_id", None),
        roles=getattr(settings, "actor_roles", None),
        permissions=getattr(settings, "actor_permissions", None),
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises ValueError if a configured strategy expression is invalid: better to
    fail at startup than to run with a policy nobody asked for.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    create_strategy = parse_strategy(settings.create_strategy)
    complete_strategy = parse_strategy(settings.complete_strategy)
    logger.info(
        "Authorization rules: create=%r complete=%r",
        settings.create_strategy,
        settings.complete_strategy,
    )

    store = TaskStore(settings.tasks_db_path)

    return AppState(
        settings=settings,
        task_store=store,
        actors=SessionActorSupplier(actor_from_settings(settings)),
        create_task=CreateTask(store, create_strategy),
        complete_task=CompleteTask(store, complete_strategy),
    )
