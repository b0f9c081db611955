"""
User Management API Routes - lookup, update and deletion of user accounts.

Every route here sits behind the session and ``ROLE_USER`` checks of the
security middleware. Lookups answer 404 for any domain failure; the update
route answers in plain text, echoing the failure message with a 400.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db import get_app_db
from todo_app.dependencies import get_current_user, get_user_service
from todo_app.exceptions import TodoAppError
from todo_app.models import User
from todo_app.schemas import MessageResponse, UserResponse, UserUpdate
from todo_app.services import UserService
from todo_app.utils.logger import setup_logger

logger = setup_logger("api.users")

router = APIRouter(prefix="/api/users", tags=["User Management"])


def _not_found(e: TodoAppError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("/all", response_model=list[UserResponse])
async def get_all_users(
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    """List every registered user; 404 when there are none."""
    try:
        users = await user_service.get_all_users(db=db)
    except TodoAppError as e:
        raise _not_found(e) from e
    return [UserResponse.model_validate(user) for user in users]


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Profile of the signed-in user."""
    return UserResponse.model_validate(current_user)


@router.api_route("/update", methods=["GET", "PUT"], response_class=PlainTextResponse)
async def update_user(
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    """
    Overwrite the user named in the body with the supplied fields.

    Accepts GET with a body for compatibility with existing clients, and PUT.
    """
    try:
        updated = await user_service.update_user(user_data, db=db)
    except TodoAppError as e:
        logger.info(f"User update rejected for '{user_data.username}': {e.message}")
        return PlainTextResponse(e.message, status_code=status.HTTP_400_BAD_REQUEST)
    return PlainTextResponse(f"User: {updated.username} updated successfully")


@router.get("/username/{username}", response_model=UserResponse)
async def get_user_by_username(
    username: str,
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    try:
        user = await user_service.get_user_by_username(username, db=db)
    except TodoAppError as e:
        raise _not_found(e) from e
    return UserResponse.model_validate(user)


@router.delete("/username/{username}", response_model=MessageResponse)
async def delete_user(
    username: str,
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    try:
        await user_service.delete_user(username, db=db)
    except TodoAppError as e:
        raise _not_found(e) from e
    return MessageResponse(message=f"User: {username} deleted successfully")


@router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(
    email: str,
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    try:
        user = await user_service.get_user_by_email(email, db=db)
    except TodoAppError as e:
        raise _not_found(e) from e
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(
    user_id: str,
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    try:
        user = await user_service.get_user_by_id(user_id, db=db)
    except TodoAppError as e:
        raise _not_found(e) from e
    return UserResponse.model_validate(user)
