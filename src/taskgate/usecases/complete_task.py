# src/taskgate/usecases/complete_task.py

from __future__ import annotations

import logging

from ..auth.context import AuthorizationContext
from ..core.errors import InvalidStateError, NotFoundError, UnauthorizedError
from ..core.ports import AuthorizationStrategy, TaskRepo
from ..tasks.task_models import Actor, Task
from .outcome import Outcome

logger = logging.getLogger(__name__)


class CompleteTask:
    """
    Mark an existing task as completed on behalf of an actor.

    Order: find -> authorize against the loaded task -> mark complete -> save.
    Not found, denied and already-completed all return before any save.
    """

    def __init__(self, repo: TaskRepo, strategy: AuthorizationStrategy) -> None:
        self._repo = repo
        self._strategy = strategy

    def execute(
        self,
        actor: Actor | None,
        task_id: int,
        *,
        strategy: AuthorizationStrategy | None = None,
    ) -> Outcome[Task]:
        task = self._repo.find(task_id)
        if task is None:
            return Outcome.failure(NotFoundError(task_id))

        ctx = AuthorizationContext(self._strategy)
        if strategy is not None:
            ctx.set_strategy(strategy)

        if not ctx.check_authorization(actor, task):
            logger.info("CompleteTask denied id=%s user=%s", task_id, getattr(actor, "user_id", None))
            return Outcome.failure(UnauthorizedError())

        try:
            task.mark_complete()
        except InvalidStateError as e:
            logger.info("CompleteTask rejected id=%s: %s", task_id, e)
            return Outcome.failure(e)

        saved = self._repo.save(task)
        logger.info("Task completed id=%s user=%s", saved.id, getattr(actor, "user_id", None))
        return Outcome.success(saved)
