from todo_app.db_handlers.base import BaseDBHandler, check_local_db
from todo_app.db_handlers.task import TaskDBHandler
from todo_app.db_handlers.user import UserDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "TaskDBHandler",
    "UserDBHandler",
]
