# Task service: title-keyed CRUD plus the pending / completed / due-today views


import uuid
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db_handlers import TaskDBHandler, check_local_db
from todo_app.exceptions import ConflictError, DomainValidationError, NotFoundError
from todo_app.models import Task
from todo_app.schemas import TaskCreate, TaskUpdate
from todo_app.utils.logger import setup_logger

logger = setup_logger(__name__)


def _require_title(title: str | None) -> str:
    if title is None:
        raise DomainValidationError("Title cannot be null")
    if not title.strip():
        raise DomainValidationError("Title cannot be blank")
    return title


class TaskService:
    def __init__(self, db_handler: TaskDBHandler | None = None):
        self.db_handler = db_handler or TaskDBHandler()

    @check_local_db
    async def add_task(self, task_data: TaskCreate, *, db: AsyncSession = None) -> Task:
        title = _require_title(task_data.title)
        if await self.db_handler.get_task_by_title(title, db=db):
            raise ConflictError("Task already exists", details={"title": title})

        try:
            task = await self.db_handler.create(task_data.model_dump(), db=db)
        except IntegrityError as e:
            raise ConflictError("Task already exists", details={"title": title}) from e

        logger.info(f"[TASK_SERVICE] Created task '{task.title}' ({task.id})")
        return task

    @check_local_db
    async def get_task_by_id(
        self, task_id: uuid.UUID, *, db: AsyncSession = None
    ) -> Task:
        if task_id is None:
            raise DomainValidationError("Id cannot be null")
        task = await self.db_handler.get(task_id, db=db)
        if task is None:
            raise NotFoundError("Task not found", details={"id": str(task_id)})
        return task

    @check_local_db
    async def get_task_by_title(self, title: str, *, db: AsyncSession = None) -> Task:
        _require_title(title)
        task = await self.db_handler.get_task_by_title(title, db=db)
        if task is None:
            raise NotFoundError("Task not found", details={"title": title})
        return task

    @check_local_db
    async def get_all_tasks(self, *, db: AsyncSession = None) -> list[Task]:
        return await self.db_handler.get_all_tasks(db=db)

    @check_local_db
    async def update_task(self, task_data: TaskUpdate, *, db: AsyncSession = None) -> Task:
        """Overwrite description, completed and due_date of the task with this title."""
        title = _require_title(task_data.title)
        existing = await self.db_handler.get_task_by_title(title, db=db)
        if existing is None:
            raise NotFoundError("Task not found", details={"title": title})

        task = await self.db_handler.update(
            existing,
            {
                "title": task_data.title,
                "description": task_data.description,
                "completed": task_data.completed,
                "due_date": task_data.due_date,
            },
            db=db,
        )
        logger.info(
            f"[TASK_SERVICE] Updated task '{task.title}' (completed={task.completed})"
        )
        return task

    @check_local_db
    async def delete_task(self, title: str, *, db: AsyncSession = None) -> None:
        _require_title(title)
        existing = await self.db_handler.get_task_by_title(title, db=db)
        if existing is None:
            raise NotFoundError("Task not found", details={"title": title})
        await self.db_handler.remove(existing.id, db=db)
        logger.info(f"[TASK_SERVICE] Deleted task '{title}'")

    @check_local_db
    async def get_pending_tasks(self, *, db: AsyncSession = None) -> list[Task]:
        return await self.db_handler.get_tasks_by_completion(False, db=db)

    @check_local_db
    async def get_completed_tasks(self, *, db: AsyncSession = None) -> list[Task]:
        return await self.db_handler.get_tasks_by_completion(True, db=db)

    @check_local_db
    async def get_today_tasks(
        self, today: date | None = None, *, db: AsyncSession = None
    ) -> list[Task]:
        """Open tasks due exactly on ``today`` (the current date by default)."""
        return await self.db_handler.get_open_tasks_due_on(
            today or date.today(), db=db
        )
