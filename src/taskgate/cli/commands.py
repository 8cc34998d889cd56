# src/taskgate/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.errors import (
    InvalidStateError,
    NotFoundError,
    TaskGateError,
    UnauthorizedError,
    ValidationError,
)
from ..core.state import AppState
from ..tasks.task_models import Actor, Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /create, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _ts_local(ts: float | None) -> str:
    if ts is None:
        return "-"
    return datetime.fromtimestamp(ts).astimezone().strftime("%Y-%m-%d %H:%M:%S")


def describe_error(err: TaskGateError) -> str:
    """User-facing text for each error kind. Unauthorized never names the rule."""
    if isinstance(err, ValidationError):
        return f"Invalid input: {err}"
    if isinstance(err, UnauthorizedError):
        return "Not allowed."
    if isinstance(err, NotFoundError):
        return f"No task with id {err.task_id}."
    if isinstance(err, InvalidStateError):
        return f"Task {err.task_id} is already {err.status}."
    return f"Error: {err}"


def format_task(task: Task) -> str:
    mark = "x" if task.is_completed else " "
    line = f"[{mark}] #{task.id} {task.title}"
    if task.description:
        line += f" - {task.description}"
    return line


def _format_actor(actor: Actor) -> str:
    roles = ", ".join(sorted(actor.roles)) or "-"
    perms = ", ".join(sorted(actor.permissions)) or "-"
    return f"user={actor.user_id or '(anonymous)'} roles=[{roles}] permissions=[{perms}]"


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_whoami(state: AppState, args: list[str]) -> str:
    return _format_actor(state.actors.current_actor())


def cmd_as(state: AppState, args: list[str]) -> str:
    """
    /as alice                         -> user only, no roles/permissions
    /as alice roles=admin perms=a,b   -> with labels
    """
    if not args:
        return "Usage: /as <user_id> [roles=a,b] [perms=x,y]"

    user_id = args[0]
    roles: list[str] = []
    perms: list[str] = []
    for opt in args[1:]:
        key, sep, value = opt.partition("=")
        if not sep:
            return f"Unknown option: {opt!r}. Use roles=... or perms=..."
        values = [v for v in value.split(",") if v]
        if key in ("roles", "role"):
            roles.extend(values)
        elif key in ("perms", "perm", "permissions"):
            perms.extend(values)
        else:
            return f"Unknown option: {key!r}. Use roles=... or perms=..."

    actor = Actor.from_labels(user_id, roles=roles, permissions=perms)
    state.actors.switch(actor)
    logger.debug("Session actor switched to %s", actor.user_id)
    return f"Now acting as {_format_actor(actor)}"


def cmd_create(state: AppState, args: list[str]) -> str:
    """/create <title> [| description]"""
    title, _, description = " ".join(args).partition("|")
    outcome = state.create_task.execute(
        state.actors.current_actor(), title.strip(), description.strip()
    )
    if outcome.error is not None:
        return describe_error(outcome.error)
    return f"Created {format_task(outcome.unwrap())}"


def cmd_complete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /complete <task_id>"

    outcome = state.complete_task.execute(state.actors.current_actor(), task_id)
    if outcome.error is not None:
        return describe_error(outcome.error)
    return f"Completed {format_task(outcome.unwrap())}"


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <task_id>"

    task = state.task_store.find(task_id)
    if task is None:
        return describe_error(NotFoundError(task_id))
    return (
        f"{format_task(task)}\n"
        f"  Status: {task.status.value}\n"
        f"  Created by: {task.created_by or '-'} at {_ts_local(task.created_at)}\n"
        f"  Completed at: {_ts_local(task.completed_at)}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list            -> recent tasks
    /list pending    -> only pending
    /list completed  -> only completed
    """
    status: TaskStatus | None = None
    if args:
        try:
            status = TaskStatus(args[0].lower())
        except ValueError:
            return "Usage: /list [pending|completed]"

    list_tasks = getattr(state.task_store, "list_tasks", None)
    if list_tasks is None:
        return "This task store does not support listing."

    tasks = list_tasks(status=status, limit=20)
    if not tasks:
        return "No tasks."
    return "\n".join(format_task(t) for t in tasks)


def cmd_policy(state: AppState, args: list[str]) -> str:
    s = state.settings
    return (
        "Authorization rules:\n"
        f"  create:   {getattr(s, 'create_strategy', '?')}\n"
        f"  complete: {getattr(s, 'complete_strategy', '?')}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("whoami", cmd_whoami, help_text="Show the current actor.")
registry.register(
    "as", cmd_as, help_text="Switch actor: /as <user> [roles=a,b] [perms=x,y]."
)
registry.register(
    "create", cmd_create, help_text="Create a task: /create <title> [| description].", aliases=["new"]
)
registry.register(
    "complete", cmd_complete, help_text="Complete a task: /complete <id>.", aliases=["done"]
)
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("list", cmd_list, help_text="List tasks: /list [pending|completed].", aliases=["ls"])
registry.register("policy", cmd_policy, help_text="Show configured authorization rules.")
