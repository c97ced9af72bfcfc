from __future__ import annotations

import asyncio
from functools import wraps
from typing import Any, Generic, TypeVar

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import AppAsyncSessionLocal
from app.exceptions import LifeRPGError
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers")

MAX_TRANSACTION_ATTEMPTS = 3

ModelType = TypeVar("ModelType", bound=Base)


def check_local_db(func):
    """Database session decorator with transaction management and retry logic.

    The outermost decorated call opens a session, commits it when the call
    returns and rolls it back on any exception. Nested calls receive the
    session through the ``db`` keyword and never commit on their own, so a
    whole workflow is persisted atomically.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        # The outermost caller who created the session owns the transaction
        if kwargs.get("db"):
            return await func(*args, **kwargs)

        last_exception = None
        for attempt in range(MAX_TRANSACTION_ATTEMPTS):
            async with AppAsyncSessionLocal() as db:
                kwargs["db"] = db
                try:
                    result = await func(*args, **kwargs)
                    await db.commit()
                    return result
                except LifeRPGError as e:
                    await db.rollback()
                    logger.info(f"{func.__name__} rejected: {e!r}")
                    raise
                except DBAPIError as e:
                    await db.rollback()
                    if isinstance(e.orig, ConnectionDoesNotExistError):
                        last_exception = e
                        logger.warning(
                            f"Connection error in {func.__name__} (attempt {attempt + 1}/{MAX_TRANSACTION_ATTEMPTS}): {e}. Retrying..."
                        )
                        await asyncio.sleep(1 + attempt)
                        continue
                    logger.error(
                        f"DBAPIError in {func.__name__} (attempt {attempt + 1}/{MAX_TRANSACTION_ATTEMPTS}): {e}",
                        exc_info=True,
                    )
                    raise
                except Exception as e:
                    await db.rollback()
                    logger.error(
                        f"Transaction failed in {func.__name__} (attempt {attempt + 1}/{MAX_TRANSACTION_ATTEMPTS}): {e}",
                        exc_info=True,
                    )
                    raise

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise last_exception

    return wrapper


class BaseDBHandler(Generic[ModelType]):
    """Generic handler for database operations with basic CRUD methods.

    Handlers only flush; committing is left to the session owner.
    """

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
            await db.flush()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            logger.warning(f"IntegrityError creating {self.model.__name__}: {e}")
            # Re-raise IntegrityError so calling code can handle it specifically
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model.__name__}: {e}", exc_info=True)
            raise

    @check_local_db
    async def get(
        self, id: Any, *, for_update: bool = False, db: AsyncSession = None
    ) -> ModelType | None:
        """Get a single record by its primary key, optionally locking the row."""
        stmt = select(self.model).where(self.model.id == id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def get_by_attributes(
        self, *, db: AsyncSession = None, **kwargs
    ) -> ModelType | None:
        """Get a single record by a set of attributes."""
        stmt = select(self.model).filter_by(**kwargs)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def update(
        self,
        db_obj: ModelType,
        update_data: dict[str, Any],
        *,
        db: AsyncSession = None,
    ) -> ModelType:
        """Write ``update_data`` onto an existing record."""
        for field, value in update_data.items():
            if not hasattr(db_obj, field):
                raise AttributeError(
                    f"{self.model.__name__} has no attribute '{field}'"
                )
            setattr(db_obj, field, value)

        try:
            db_obj = await db.merge(db_obj)
            await db.flush()
            await db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            logger.error(
                f"Error updating {self.model.__name__} with id {db_obj.id}: {e}",
                exc_info=True,
            )
            raise

    @check_local_db
    async def remove(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Remove a record from the database by its primary key."""
        obj = await self.get(id, db=db)
        if obj is None:
            return None
        try:
            await db.delete(obj)
            await db.flush()
            return obj
        except SQLAlchemyError as e:
            logger.error(
                f"Error removing {self.model.__name__} with id {id}: {e}",
                exc_info=True,
            )
            raise

    @check_local_db
    async def batch_create(
        self, obj_dicts: list[dict[str, Any]], *, db: AsyncSession = None
    ) -> list[ModelType]:
        """Create multiple records in the current transaction."""
        if not obj_dicts:
            return []

        try:
            db_objs = [self.model(**obj_dict) for obj_dict in obj_dicts]
            db.add_all(db_objs)
            await db.flush()
            for obj in db_objs:
                await db.refresh(obj)
            return db_objs
        except SQLAlchemyError as e:
            logger.error(
                f"Error in batch_create for {self.model.__name__}: {e}", exc_info=True
            )
            raise
