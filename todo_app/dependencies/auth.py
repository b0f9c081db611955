"""
Authentication dependencies for FastAPI route protection.

The security middleware has already validated the session cookie; these
dependencies resolve the signed-in account for the route.
"""


from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db import get_app_db
from todo_app.db_handlers import UserDBHandler
from todo_app.models import User


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_app_db),
) -> User:
    """
    Dependency to get the current authenticated user from the session.
    """
    username = getattr(request.state, "username", None)
    if username is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    user_handler = UserDBHandler()
    user = await user_handler.get_user_by_username(username, db=db)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user
