# src/taskgate/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets or external services required at import time.
- Authorization rules are plain strings (see auth.strategies.parse_strategy),
  so the policy can change without touching code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKGATE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env (gitignored) never overrides real environment variables.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- Authorization rules (strategy expressions) ----
    create_strategy: str
    complete_strategy: str

    # ---- Default console actor ----
    actor_user_id: Optional[str]
    actor_roles: List[str]
    actor_permissions: List[str]

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskgate").strip() or "taskgate"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskgate"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        create_strategy = _env(_k("CREATE_STRATEGY"), "role:admin").strip() or "role:admin"
        complete_strategy = (
            _env(_k("COMPLETE_STRATEGY"), "permission:tasks.complete|owner").strip()
            or "permission:tasks.complete|owner"
        )

        actor_user_id = _env(_k("ACTOR_USER_ID"), "").strip() or None
        actor_roles = _env_list(_k("ACTOR_ROLES"), [])
        actor_permissions = _env_list(_k("ACTOR_PERMISSIONS"), [])

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            create_strategy=create_strategy,
            complete_strategy=complete_strategy,
            actor_user_id=actor_user_id,
            actor_roles=actor_roles,
            actor_permissions=actor_permissions,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
