# src/taskgate/usecases/create_task.py

from __future__ import annotations

import logging
from typing import Any

from ..auth.context import AuthorizationContext
from ..core.errors import UnauthorizedError, ValidationError
from ..core.ports import AuthorizationStrategy, TaskRepo
from ..tasks.task_models import Actor, Task
from .outcome import Outcome

logger = logging.getLogger(__name__)

MAX_TITLE_LEN = 200


def _validate(title: Any, description: Any) -> ValidationError | None:
    if not isinstance(title, str) or not title.strip():
        return ValidationError("title is required")
    if len(title.strip()) > MAX_TITLE_LEN:
        return ValidationError(f"title is too long (max {MAX_TITLE_LEN} characters)")
    if not isinstance(description, str):
        return ValidationError("description must be text")
    return None


class CreateTask:
    """
    Create a pending task on behalf of an actor.

    Order: validate input -> authorize -> save. A denied check never reaches the repo.
    """

    def __init__(self, repo: TaskRepo, strategy: AuthorizationStrategy) -> None:
        self._repo = repo
        self._strategy = strategy

    def execute(
        self,
        actor: Actor | None,
        title: str,
        description: str = "",
        *,
        strategy: AuthorizationStrategy | None = None,
    ) -> Outcome[Task]:
        err = _validate(title, description)
        if err is not None:
            return Outcome.failure(err)

        candidate = Task.new(title, description, created_by=getattr(actor, "user_id", None))

        # One context per call: a per-call override never leaks into other callers.
        ctx = AuthorizationContext(self._strategy)
        if strategy is not None:
            ctx.set_strategy(strategy)

        if not ctx.check_authorization(actor, candidate):
            logger.info("CreateTask denied user=%s", getattr(actor, "user_id", None))
            return Outcome.failure(UnauthorizedError())

        saved = self._repo.save(candidate)
        logger.info("Task created id=%s user=%s", saved.id, saved.created_by)
        return Outcome.success(saved)
