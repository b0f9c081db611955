"""
Task API Routes - public endpoints for managing to-do items.

Domain errors raised by the task service propagate to the application's
exception handlers: NotFound → 404, Conflict → 409, Validation → 400.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db import get_app_db
from todo_app.dependencies import get_task_service
from todo_app.schemas import MessageResponse, TaskCreate, TaskResponse, TaskUpdate
from todo_app.services import TaskService

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


def _to_response(tasks) -> list[TaskResponse]:
    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/all", response_model=list[TaskResponse])
async def get_all_tasks(
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    return _to_response(await task_service.get_all_tasks(db=db))


@router.get("/pending", response_model=list[TaskResponse])
async def get_pending_tasks(
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    return _to_response(await task_service.get_pending_tasks(db=db))


@router.get("/completed", response_model=list[TaskResponse])
async def get_completed_tasks(
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    return _to_response(await task_service.get_completed_tasks(db=db))


@router.get("/today", response_model=list[TaskResponse])
async def get_today_tasks(
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """Open tasks due today."""
    return _to_response(await task_service.get_today_tasks(db=db))


@router.post(
    "/add", response_model=TaskResponse, status_code=status.HTTP_201_CREATED
)
async def add_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    task = await task_service.add_task(task_data, db=db)
    return TaskResponse.model_validate(task)


@router.put("/update", response_model=TaskResponse)
async def update_task(
    task_data: TaskUpdate,
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """Replace description, completed and due_date of the task with this title."""
    task = await task_service.update_task(task_data, db=db)
    return TaskResponse.model_validate(task)


@router.get("/title/{title}", response_model=TaskResponse)
async def get_task_by_title(
    title: str,
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    task = await task_service.get_task_by_title(title, db=db)
    return TaskResponse.model_validate(task)


@router.delete("/title/{title}", response_model=MessageResponse)
async def delete_task(
    title: str,
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.delete_task(title, db=db)
    return MessageResponse(message=f"Task: {title} deleted successfully")


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task_by_id(
    task_id: UUID,
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    task = await task_service.get_task_by_id(task_id, db=db)
    return TaskResponse.model_validate(task)
