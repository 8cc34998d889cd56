# tests/test_task_models.py

from __future__ import annotations

import pytest

from taskgate.core.errors import InvalidStateError
from taskgate.tasks.task_models import Actor, Task, TaskStatus


def test_new_task_is_pending_and_unsaved() -> None:
    t = Task.new("  Write spec ", "  details ", created_by="alice")
    assert t.id is None
    assert t.title == "Write spec"
    assert t.description == "details"
    assert t.status is TaskStatus.PENDING
    assert t.created_by == "alice"
    assert t.completed_at is None
    assert not t.is_completed


def test_mark_complete_sets_status_and_timestamps() -> None:
    t = Task.new("x")
    t.mark_complete(now=1234.5)
    assert t.status is TaskStatus.COMPLETED
    assert t.completed_at == 1234.5
    assert t.updated_at == 1234.5


def test_mark_complete_twice_raises_and_keeps_first_completion() -> None:
    t = Task.new("x")
    t.id = 3
    t.mark_complete(now=100.0)

    with pytest.raises(InvalidStateError) as exc:
        t.mark_complete(now=200.0)

    assert exc.value.task_id == 3
    assert exc.value.status == "completed"
    assert t.status is TaskStatus.COMPLETED
    assert t.completed_at == 100.0
    assert t.updated_at == 100.0


def test_second_completion_is_never_a_silent_noop() -> None:
    # Both orderings on fresh objects: first call always succeeds, second always raises.
    for first_ts, second_ts in ((1.0, 2.0), (2.0, 1.0)):
        t = Task.new("x")
        t.mark_complete(now=first_ts)
        with pytest.raises(InvalidStateError):
            t.mark_complete(now=second_ts)
        assert t.completed_at == first_ts


def test_status_from_db() -> None:
    assert TaskStatus.from_db(None) is TaskStatus.PENDING
    assert TaskStatus.from_db("") is TaskStatus.PENDING
    assert TaskStatus.from_db("completed") is TaskStatus.COMPLETED
    with pytest.raises(ValueError):
        TaskStatus.from_db("archived")


def test_actor_from_labels_normalizes() -> None:
    a = Actor.from_labels("  ", roles=["admin", " ", " guest "], permissions=None)
    assert a.user_id is None
    assert a.roles == frozenset({"admin", "guest"})
    assert a.permissions == frozenset()
    assert a.has_role("guest")
    assert not a.has_permission("tasks.complete")
