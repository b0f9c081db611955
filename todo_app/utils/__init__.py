"""
Common utilities package for the task manager backend.

Logging setup lives in ``todo_app.utils.logger``; password hashing and
session tokens in ``todo_app.utils.auth`` (imported directly, since it
depends on the application settings).
"""

from todo_app.utils.logger import setup_logger

__all__ = [
    "setup_logger",
]
