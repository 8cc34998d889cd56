# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.

Strategy expressions (see taskgate.auth.strategies):
  role:<name>          actor holds the role
  permission:<name>    actor holds the permission (alias: perm:<name>)
  owner                actor created the task
  hours:<start>-<end>  only during local hours [start, end); 22-6 wraps midnight
  allow | deny         constants
  a|b                  any of
  a&b                  all of
"""

ENV_VARS = {
    # App / logging
    "TASKGATE_APP_NAME": "App display name (default: taskgate).",
    "TASKGATE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKGATE_DATA_DIR": "Local data directory for the DB and taskgate.log (default: .local/taskgate).",
    "TASKGATE_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # Authorization rules
    "TASKGATE_CREATE_STRATEGY": "Who may create tasks (default: role:admin).",
    "TASKGATE_COMPLETE_STRATEGY": (
        "Who may complete tasks (default: permission:tasks.complete|owner)."
    ),
    # Console actor at startup (switch later with /as)
    "TASKGATE_ACTOR_USER_ID": "User id of the console actor (default: anonymous).",
    "TASKGATE_ACTOR_ROLES": "Comma/space separated roles of the console actor.",
    "TASKGATE_ACTOR_PERMISSIONS": "Comma/space separated permissions of the console actor.",
}
