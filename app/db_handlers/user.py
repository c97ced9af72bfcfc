from __future__ import annotations

import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.user import STAT_NAMES, User
from app.schemas import ProgressionState
from app.utils.logger import setup_logger

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
            return await self.get_by_attributes(username=username, db=db)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by username '{username}': {e}")
            raise

    @check_local_db
    async def get_user_for_update(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> User | None:
        """Load a user and lock its row until the current transaction ends."""
        return await self.get(user_id, for_update=True, db=db)

    @check_local_db
    async def save_progression(
        self, user: User, state: ProgressionState, *, db: AsyncSession = None
    ) -> User:
        """Replace every progression field of ``user`` with ``state``."""
        update_data = {
            "level": state.level,
            "xp": state.xp,
            "total_xp": state.total_xp,
            "available_points": state.available_points,
        }
        for stat_name in STAT_NAMES:
            update_data[stat_name] = getattr(state.stats, stat_name)
        return await self.update(user, update_data, db=db)
