"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, Actor)
- task_store.py: SQLite-backed TaskRepo implementation + listing helpers
"""
