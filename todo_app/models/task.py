"""
Task model for to-do items.

A task is identified for updates and deletion by its unique title. Tasks
that are not completed and whose due date is today make up the "today"
view.
"""

from sqlalchemy import Boolean, Column, Date, Index, String, Text

from todo_app.models.base import Base, TimestampMixin, UUIDMixin


class Task(Base, UUIDMixin, TimestampMixin):
    """A single to-do item."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_title", "title", unique=True),
        Index("ix_tasks_completed", "completed"),
        Index("ix_tasks_due_date", "due_date"),
    )

    title = Column(
        String(255),
        nullable=False,
        comment="Unique title, also the lookup key for updates and deletion",
    )

    description = Column(Text, nullable=True, comment="Free-form details")

    completed = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the task is done",
    )

    due_date = Column(Date, nullable=True, comment="Calendar day the task is due")

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', completed={self.completed})>"
