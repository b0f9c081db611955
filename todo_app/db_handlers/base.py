from __future__ import annotations

import asyncio
from functools import wraps
from typing import Any, Generic, TypeVar

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db import AppAsyncSessionLocal
from todo_app.exceptions import TodoAppError
from todo_app.models.base import Base
from todo_app.utils.logger import setup_logger

logger = setup_logger("db_handlers")


ModelType = TypeVar("ModelType", bound=Base)

MAX_ATTEMPTS = 3


def check_local_db(func):
    """Database session decorator with transaction management and retry logic."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        # A caller-supplied session means the caller owns the transaction.
        if kwargs.get("db"):
            return await func(*args, **kwargs)

        last_exception = None
        for attempt in range(MAX_ATTEMPTS):
            async with AppAsyncSessionLocal() as db:
                kwargs["db"] = db
                try:
                    result = await func(*args, **kwargs)
                    await db.commit()
                    return result
                except TodoAppError:
                    await db.rollback()
                    raise
                except DBAPIError as e:
                    await db.rollback()
                    if isinstance(e.orig, ConnectionDoesNotExistError):
                        last_exception = e
                        logger.warning(
                            f"Connection error in {func.__name__} (attempt {attempt + 1}/{MAX_ATTEMPTS}): {e}. Retrying..."
                        )
                        await asyncio.sleep(1 + attempt)
                        continue
                    logger.error(
                        f"DBAPIError in {func.__name__} (attempt {attempt + 1}/{MAX_ATTEMPTS}): {e}",
                        exc_info=True,
                    )
                    raise
                except Exception as e:
                    await db.rollback()
                    logger.error(
                        f"Transaction failed in {func.__name__} (attempt {attempt + 1}/{MAX_ATTEMPTS}): {e}",
                        exc_info=True,
                    )
                    raise

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise last_exception

    return wrapper


class BaseDBHandler(Generic[ModelType]):
    """Generic handler for database operations with basic CRUD methods."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    @check_local_db
    async def create(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        """Create a new record in the database."""

        db_obj = self.model(**obj_dict)
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"IntegrityError creating {self.model.__name__}: {e}")
            # Re-raise IntegrityError so calling code can handle it specifically
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}", exc_info=True)
            raise

    @check_local_db
    async def get(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Get a single record by its primary key."""
        stmt = select(self.model).where(self.model.id == id)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def get_multi(
        self,
        *,
        db: AsyncSession = None,
        skip: int = 0,
        limit: int | None = None,
        order_by: Any = None,
    ) -> list[ModelType]:
        """Get multiple records, optionally paginated and ordered."""
        stmt = select(self.model)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def get_multi_by_attributes(
        self,
        *,
        db: AsyncSession = None,
        order_by: Any = None,
        **kwargs,
    ) -> list[ModelType]:
        """Get every record matching a set of attributes."""
        stmt = select(self.model).filter_by(**kwargs)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def update(
        self,
        db_obj: ModelType,
        update_data: dict[str, Any],
        *,
        db: AsyncSession = None,
    ) -> ModelType:
        """Update an existing record in the database."""

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        obj_id = db_obj.id
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            await db.rollback()
            logger.warning(
                f"IntegrityError updating {self.model.__name__} with id {obj_id}: {e}"
            )
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                f"Error updating {self.model.__name__} with id {obj_id}: {e}",
                exc_info=True,
            )
            raise

    @check_local_db
    async def remove(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Remove a record from the database by its primary key."""
        obj = await self.get(id, db=db)
        if obj:
            try:
                await db.delete(obj)
                await db.commit()
                return obj
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error(
                    f"Error removing {self.model.__name__} with id {id}: {e}",
                    exc_info=True,
                )
                raise
        return None
