"""
Database models for the task manager backend.

Architecture: User accounts and Task items, stored independently.
"""

from todo_app.models.base import Base
from todo_app.models.task import Task
from todo_app.models.user import User

__all__ = [
    "Base",
    "User",
    "Task",
]
