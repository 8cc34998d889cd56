# tests/test_usecases.py

from __future__ import annotations

import pytest

from taskgate.auth.strategies import AllowAll, DenyAll, OwnerStrategy, RoleStrategy
from taskgate.core.errors import (
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from taskgate.tasks.task_models import Actor, Task, TaskStatus
from taskgate.usecases import CompleteTask, CreateTask, Outcome

from .fakes import InMemoryTaskRepo, SpyStrategy


def _pending(task_id: int, created_by: str | None = None) -> Task:
    return Task(
        id=task_id,
        title=f"task {task_id}",
        description="",
        status=TaskStatus.PENDING,
        created_by=created_by,
        created_at=1.0,
        updated_at=1.0,
    )


# ---- CreateTask ----


def test_admin_creates_pending_task_with_new_id(repo: InMemoryTaskRepo, admin: Actor) -> None:
    outcome = CreateTask(repo, RoleStrategy("admin")).execute(admin, "Write spec", "")

    assert outcome.ok
    task = outcome.unwrap()
    assert task.id is not None
    assert task.status is TaskStatus.PENDING
    assert task.title == "Write spec"
    assert task.created_by == "alice"
    assert repo.find(task.id) == task


def test_guest_is_denied_and_nothing_is_stored(repo: InMemoryTaskRepo, guest: Actor) -> None:
    outcome = CreateTask(repo, RoleStrategy("admin")).execute(guest, "Write spec", "")

    assert not outcome.ok
    assert isinstance(outcome.error, UnauthorizedError)
    assert repo.save_calls == []
    assert repo.tasks == {}


def test_unauthorized_message_does_not_leak_policy(repo: InMemoryTaskRepo, guest: Actor) -> None:
    outcome = CreateTask(repo, RoleStrategy("admin")).execute(guest, "x")
    assert "admin" not in str(outcome.error)
    assert "Role" not in str(outcome.error)


def test_anonymous_actor_is_denied(repo: InMemoryTaskRepo) -> None:
    outcome = CreateTask(repo, RoleStrategy("admin")).execute(None, "x")
    assert isinstance(outcome.error, UnauthorizedError)
    assert repo.save_calls == []


@pytest.mark.parametrize(
    ("title", "description"),
    [("", ""), ("   ", ""), (None, ""), ("x" * 201, ""), ("ok", None)],
)
def test_validation_runs_before_authorization(repo: InMemoryTaskRepo, admin: Actor, title, description) -> None:
    spy = SpyStrategy(answer=True)
    outcome = CreateTask(repo, spy).execute(admin, title, description)

    assert isinstance(outcome.error, ValidationError)
    assert spy.calls == []
    assert repo.save_calls == []


def test_create_authorizes_against_unsaved_candidate(repo: InMemoryTaskRepo, admin: Actor) -> None:
    spy = SpyStrategy(answer=True)
    CreateTask(repo, spy).execute(admin, "title", "desc")

    (actor, resource), = spy.calls
    assert actor is admin
    assert isinstance(resource, Task)
    assert resource.id is None
    assert resource.title == "title"


def test_per_call_strategy_override_does_not_stick(repo: InMemoryTaskRepo, admin: Actor) -> None:
    uc = CreateTask(repo, AllowAll())

    denied = uc.execute(admin, "a", strategy=DenyAll())
    allowed = uc.execute(admin, "b")

    assert isinstance(denied.error, UnauthorizedError)
    assert allowed.ok
    assert [t.title for t in repo.save_calls] == ["b"]


def test_storage_errors_propagate(admin: Actor) -> None:
    class BrokenRepo(InMemoryTaskRepo):
        def save(self, task: Task) -> Task:
            raise OSError("disk full")

    with pytest.raises(OSError):
        CreateTask(BrokenRepo(), AllowAll()).execute(admin, "x")


# ---- CompleteTask ----


def test_authorized_actor_completes_existing_task(admin: Actor) -> None:
    repo = InMemoryTaskRepo([_pending(7)])
    outcome = CompleteTask(repo, RoleStrategy("admin")).execute(admin, 7)

    task = outcome.unwrap()
    assert task.id == 7
    assert task.status is TaskStatus.COMPLETED
    assert task.completed_at is not None
    assert repo.tasks[7].status is TaskStatus.COMPLETED


def test_missing_task_is_not_found_and_never_saved(admin: Actor) -> None:
    repo = InMemoryTaskRepo([_pending(7)])
    spy = SpyStrategy(answer=True)
    outcome = CompleteTask(repo, spy).execute(admin, 99)

    assert isinstance(outcome.error, NotFoundError)
    assert outcome.error.task_id == 99
    assert repo.save_calls == []
    assert spy.calls == []


def test_denied_completion_is_a_noop(guest: Actor) -> None:
    repo = InMemoryTaskRepo([_pending(7)])
    outcome = CompleteTask(repo, RoleStrategy("admin")).execute(guest, 7)

    assert isinstance(outcome.error, UnauthorizedError)
    assert repo.save_calls == []
    assert repo.tasks[7].status is TaskStatus.PENDING


def test_complete_authorizes_against_loaded_task() -> None:
    repo = InMemoryTaskRepo([_pending(3, created_by="alice"), _pending(4, created_by="bob")])
    uc = CompleteTask(repo, OwnerStrategy())
    alice = Actor.from_labels("alice")

    assert uc.execute(alice, 3).ok
    assert isinstance(uc.execute(alice, 4).error, UnauthorizedError)


def test_completing_twice_reports_invalid_state_and_saves_once(admin: Actor) -> None:
    repo = InMemoryTaskRepo([_pending(7)])
    uc = CompleteTask(repo, AllowAll())

    first = uc.execute(admin, 7)
    second = uc.execute(admin, 7)

    assert first.ok
    assert isinstance(second.error, InvalidStateError)
    assert len(repo.save_calls) == 1
    with pytest.raises(InvalidStateError):
        second.unwrap()


# ---- Outcome ----


def test_outcome_requires_exactly_one_side() -> None:
    with pytest.raises(ValueError):
        Outcome()
    with pytest.raises(ValueError):
        Outcome(value=1, error=NotFoundError(1))

    assert Outcome.success(5).unwrap() == 5
    failed = Outcome.failure(NotFoundError(5))
    assert not failed.ok
    with pytest.raises(NotFoundError):
        failed.unwrap()
