# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskgate.cli.bootstrap import create_initial_state
from taskgate.core.state import AppState
from taskgate.tasks.task_models import Actor

from .fakes import InMemoryTaskRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="taskgate-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        create_strategy="role:admin",
        complete_strategy="permission:tasks.complete|owner",
        actor_user_id="alice",
        actor_roles=["admin"],
        actor_permissions=[],
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired exactly like the real app.

    NOTE: We keep the real SQLite TaskStore here because its correctness
    is part of what we want to test.
    """
    return create_initial_state(settings=settings)


@pytest.fixture()
def repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture()
def admin() -> Actor:
    return Actor.from_labels("alice", roles=["admin"], permissions=["tasks.complete"])


@pytest.fixture()
def guest() -> Actor:
    return Actor.from_labels("bob", roles=["guest"])
