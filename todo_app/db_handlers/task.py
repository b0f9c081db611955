from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db_handlers.base import BaseDBHandler, check_local_db
from todo_app.models.task import Task
from todo_app.utils.logger import setup_logger

logger = setup_logger("task_db_handler")


class TaskDBHandler(BaseDBHandler[Task]):
    def __init__(self):
        super().__init__(Task)

    @check_local_db
    async def get_task_by_title(
        self, title: str, *, db: AsyncSession = None
    ) -> Task | None:
        """Get a task by its unique title."""
        try:
            stmt = select(Task).where(Task.title == title)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving task by title '{title}': {e}")
            raise

    @check_local_db
    async def get_all_tasks(self, *, db: AsyncSession = None) -> list[Task]:
        return await self.get_multi(db=db, order_by=Task.created_at)

    @check_local_db
    async def get_tasks_by_completion(
        self, completed: bool, *, db: AsyncSession = None
    ) -> list[Task]:
        """Get all tasks whose completed flag equals ``completed``."""
        return await self.get_multi_by_attributes(
            db=db, completed=completed, order_by=Task.created_at
        )

    @check_local_db
    async def get_open_tasks_due_on(
        self, due_date: date, *, db: AsyncSession = None
    ) -> list[Task]:
        """Get tasks that are not completed and due exactly on ``due_date``."""
        try:
            stmt = (
                select(Task)
                .where(Task.completed.is_(False), Task.due_date == due_date)
                .order_by(Task.created_at)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving tasks due on {due_date}: {e}")
            raise
