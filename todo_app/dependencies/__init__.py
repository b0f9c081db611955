from todo_app.dependencies.auth import get_current_user
from todo_app.dependencies.services import get_task_service, get_user_service

__all__ = [
    "get_current_user",
    "get_task_service",
    "get_user_service",
]
