"""
Domain services enforcing the business rules above the database handlers.
"""

from todo_app.services.task_service import TaskService
from todo_app.services.user_service import UserService

__all__ = [
    "TaskService",
    "UserService",
]
