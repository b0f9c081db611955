"""
Domain exceptions raised by the service layer.

Every failure a caller can react to is one of the tagged variants below;
the API layer maps them to HTTP status codes without parsing messages.
"""

from typing import Any


class TodoAppError(Exception):
    """
    Base exception for all task manager domain errors.

    Carries a human-readable message and optional structured details.
    """

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(TodoAppError):
    """An entity looked up by id, username, email or title does not exist."""

    status_code = 404


class ConflictError(TodoAppError):
    """A create or update would duplicate a unique key."""

    status_code = 409


class DomainValidationError(TodoAppError):
    """A required field is blank or a value is malformed."""

    status_code = 400


__all__ = [
    "TodoAppError",
    "NotFoundError",
    "ConflictError",
    "DomainValidationError",
]
