"""
Base configurations and mixins for database models.

This module provides the foundation for all database models of the task
manager. It includes the declarative base, a UUID primary key mixin and
automatic timestamp management shared by users and tasks.
"""

import uuid
from datetime import date, datetime

from sqlalchemy import Column, DateTime, Uuid, inspect
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now


class CustomBase:
    """
    Custom base class for SQLAlchemy models with enhanced serialization.

    This class provides a `to_dict` method that automatically converts
    model instances to dictionaries, handling special data types like
    UUID, date and datetime objects appropriately.
    """

    def to_dict(self) -> dict:
        d = {}
        if not self:
            return d
        for column in inspect(self).mapper.column_attrs:
            value = getattr(self, column.key)
            if isinstance(value, uuid.UUID):
                d[column.key] = str(value)
            elif isinstance(value, date | datetime):
                d[column.key] = value.isoformat()
            else:
                d[column.key] = value
        return d


# Create the base class for all models
Base = declarative_base(cls=CustomBase)


class TimestampMixin:
    """
    Mixin class that adds automatic timestamp management to models.

    The created_at timestamp is set by the database when the record is first
    inserted, and updated_at is refreshed whenever the record is modified.
    """

    created_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        onupdate=db_now(),
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class UUIDMixin:
    """
    Mixin class that adds UUID primary key to models.

    Uses SQLAlchemy's generic ``Uuid`` type: native UUID on PostgreSQL,
    CHAR(32) on SQLite.
    """

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key using UUID4 format",
    )


__all__ = ["Base", "TimestampMixin", "UUIDMixin"]
