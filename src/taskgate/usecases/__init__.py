"""
Use cases.

Components:
- create_task.py: CreateTask (validate -> authorize -> save)
- complete_task.py: CompleteTask (find -> authorize -> mark complete -> save)
- outcome.py: explicit success/error result returned by both
"""

from .complete_task import CompleteTask
from .create_task import CreateTask
from .outcome import Outcome

__all__ = ["CompleteTask", "CreateTask", "Outcome"]
