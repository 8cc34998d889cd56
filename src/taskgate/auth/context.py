# src/taskgate/auth/context.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import AuthorizationStrategy
from ..tasks.task_models import Actor

logger = logging.getLogger(__name__)


class AuthorizationContext:
    """
    Holds the active authorization strategy and applies it.

    No decision logic lives here: `check_authorization` always delegates to the
    strategy set last. Swapping replaces the reference; strategies themselves are
    never mutated.

    Not meant to be shared between concurrent requests when `set_strategy` is
    used per request: give each call its own context (the use cases do).
    """

    def __init__(self, strategy: AuthorizationStrategy) -> None:
        self._strategy = strategy

    @property
    def strategy(self) -> AuthorizationStrategy:
        return self._strategy

    def set_strategy(self, strategy: AuthorizationStrategy) -> None:
        self._strategy = strategy

    def check_authorization(self, actor: Actor | None, resource: Any) -> bool:
        strategy = self._strategy
        allowed = bool(strategy.authorize(actor, resource))
        logger.debug(
            "Authorization %s user=%s strategy=%s",
            "allowed" if allowed else "denied",
            getattr(actor, "user_id", None),
            type(strategy).__name__,
        )
        return allowed
