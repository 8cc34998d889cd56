# src/taskgate/auth/strategies.py

"""
Authorization strategies.

Every strategy is a frozen dataclass with a single `authorize(actor, resource)`
method. Configuration (required role, hour window, children) is fixed at
construction, so instances are safe to share between concurrent callers.

New rules are added by writing another class with `authorize` and, if it
should be configurable from settings, registering a factory in `registry`.
Neither the context nor the use cases need to change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.ports import AuthorizationStrategy
from ..tasks.task_models import Actor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoleStrategy:
    """Allow iff the actor holds `required_role`."""

    required_role: str

    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        if actor is None or resource is None:
            return False
        return actor.has_role(self.required_role)


@dataclass(frozen=True, slots=True)
class PermissionStrategy:
    """Allow iff the actor holds `required_permission`."""

    required_permission: str

    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        if actor is None or resource is None:
            return False
        return actor.has_permission(self.required_permission)


@dataclass(frozen=True, slots=True)
class OwnerStrategy:
    """Allow iff the resource was created by this actor (resource.created_by == actor.user_id)."""

    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        if actor is None or resource is None or not actor.user_id:
            return False
        return getattr(resource, "created_by", None) == actor.user_id


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True, slots=True)
class TimeWindowStrategy:
    """
    Allow only while the local hour is in [start_hour, end_hour).

    A window with start > end wraps past midnight (e.g. 22-6).
    start == end means the whole day.
    """

    start_hour: int
    end_hour: int
    clock: Callable[[], datetime] = field(default=_local_now, compare=False, repr=False)

    def __post_init__(self) -> None:
        for h in (self.start_hour, self.end_hour):
            if not 0 <= h <= 24:
                raise ValueError(f"hour out of range: {h}")

    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        if actor is None or resource is None:
            return False

        hour = self.clock().hour
        if self.start_hour == self.end_hour:
            return True
        if self.start_hour < self.end_hour:
            return self.start_hour <= hour < self.end_hour
        return hour >= self.start_hour or hour < self.end_hour


@dataclass(frozen=True, slots=True, init=False)
class AllOf:
    """Allow iff every child allows. An empty composite denies."""

    strategies: tuple[AuthorizationStrategy, ...]

    def __init__(self, *strategies: AuthorizationStrategy) -> None:
        object.__setattr__(self, "strategies", tuple(strategies))

    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        if not self.strategies:
            return False
        return all(s.authorize(actor, resource) for s in self.strategies)


@dataclass(frozen=True, slots=True, init=False)
class AnyOf:
    """Allow iff at least one child allows. An empty composite denies."""

    strategies: tuple[AuthorizationStrategy, ...]

    def __init__(self, *strategies: AuthorizationStrategy) -> None:
        object.__setattr__(self, "strategies", tuple(strategies))

    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        return any(s.authorize(actor, resource) for s in self.strategies)


@dataclass(frozen=True, slots=True)
class AllowAll:
    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        return actor is not None and resource is not None


@dataclass(frozen=True, slots=True)
class DenyAll:
    def authorize(self, actor: Actor | None, resource: Any) -> bool:
        return False


# --------------------------------------------------------------------------------------
# Building strategies from config strings
# --------------------------------------------------------------------------------------

StrategyFactory = Callable[[str], AuthorizationStrategy]


def _require_arg(kind: str, arg: str) -> str:
    if not arg:
        raise ValueError(f"Strategy '{kind}' requires an argument, e.g. '{kind}:value'.")
    return arg


def _hours(arg: str) -> TimeWindowStrategy:
    start, sep, end = _require_arg("hours", arg).partition("-")
    if not sep:
        raise ValueError(f"Invalid hours window: {arg!r} (expected 'START-END').")
    try:
        return TimeWindowStrategy(int(start), int(end))
    except ValueError as e:
        raise ValueError(f"Invalid hours window: {arg!r} ({e}).") from e


class StrategyRegistry:
    """
    Maps a strategy kind ("role", "permission", ...) to a factory.

    Text form:
      kind[:arg]                 single strategy
      a|b|c                      AnyOf(a, b, c)
      a&b&c                      AllOf(a, b, c)
    Mixing '|' and '&' in one expression is rejected.
    """

    def __init__(self) -> None:
        self._factories: dict[str, StrategyFactory] = {}

    def register(self, name: str, factory: StrategyFactory, aliases: list[str] | None = None) -> None:
        aliases = aliases or []
        self._factories[name.lower()] = factory
        for alias in aliases:
            self._factories[alias.lower()] = factory

    def kinds(self) -> list[str]:
        return sorted(self._factories)

    def build(self, text: str) -> AuthorizationStrategy:
        raw = (text or "").strip()
        if not raw:
            raise ValueError("Empty strategy expression.")

        if "|" in raw and "&" in raw:
            raise ValueError(f"Cannot mix '|' and '&' in one strategy expression: {raw!r}")
        if "|" in raw:
            return AnyOf(*(self._build_one(p) for p in raw.split("|")))
        if "&" in raw:
            return AllOf(*(self._build_one(p) for p in raw.split("&")))
        return self._build_one(raw)

    def _build_one(self, part: str) -> AuthorizationStrategy:
        kind, _, arg = part.strip().partition(":")
        kind = kind.strip().lower()
        factory = self._factories.get(kind)
        if factory is None:
            raise ValueError(f"Unknown strategy kind: {kind!r}. Known: {', '.join(self.kinds())}")
        strategy = factory(arg.strip())
        logger.debug("Built strategy %r from %r", strategy, part)
        return strategy


registry = StrategyRegistry()

registry.register("role", lambda arg: RoleStrategy(_require_arg("role", arg)))
registry.register(
    "permission", lambda arg: PermissionStrategy(_require_arg("permission", arg)), aliases=["perm"]
)
registry.register("owner", lambda _arg: OwnerStrategy())
registry.register("hours", _hours)
registry.register("allow", lambda _arg: AllowAll())
registry.register("deny", lambda _arg: DenyAll())


def parse_strategy(text: str) -> AuthorizationStrategy:
    """Build a strategy from its text form using the default registry."""
    return registry.build(text)
