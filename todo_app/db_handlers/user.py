from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db_handlers.base import BaseDBHandler, check_local_db
from todo_app.models.user import User
from todo_app.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self):
        super().__init__(User)

    @check_local_db
    async def get_user_by_username(
        self, username: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by username."""
        try:
            stmt = select(User).filter(User.username == username)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by username '{username}': {e}")
            raise

    @check_local_db
    async def get_user_by_email(
        self, email: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by e-mail address."""
        try:
            stmt = select(User).filter(User.email == email)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by email '{email}': {e}")
            raise

    @check_local_db
    async def get_all_users(self, *, db: AsyncSession = None) -> list[User]:
        return await self.get_multi(db=db, order_by=User.username)

    @check_local_db
    async def remove_by_username(
        self, username: str, *, db: AsyncSession = None
    ) -> User | None:
        """Delete the user with the given username, returning it if it existed."""
        user = await self.get_user_by_username(username, db=db)
        if user is None:
            return None
        return await self.remove(user.id, db=db)
