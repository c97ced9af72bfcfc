from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.mission import Mission, MissionType
from app.schemas import MissionRecord
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.mission")


class MissionDBHandler(BaseDBHandler[Mission]):
    def __init__(self):
        super().__init__(Mission)

    @check_local_db
    async def get_user_missions(
        self,
        user_id: uuid.UUID,
        mission_type: MissionType | None = None,
        *,
        db: AsyncSession = None,
    ) -> list[Mission]:
        """Get all missions owned by a user in catalog order."""
        try:
            stmt = select(Mission).where(Mission.user_id == user_id)
            if mission_type is not None:
                stmt = stmt.where(Mission.type == MissionType(mission_type).value)
            stmt = stmt.order_by(Mission.position, Mission.created_at)
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving missions for user {user_id}: {e}")
            raise

    @check_local_db
    async def get_owned_mission(
        self,
        mission_id: uuid.UUID,
        user_id: uuid.UUID,
        *,
        for_update: bool = False,
        db: AsyncSession = None,
    ) -> Mission | None:
        """Get a mission by ID only if it belongs to the given user."""
        try:
            stmt = select(Mission).where(
                Mission.id == mission_id, Mission.user_id == user_id
            )
            if for_update:
                stmt = stmt.with_for_update()
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                f"Error retrieving owned mission {mission_id} for user {user_id}: {e}"
            )
            raise

    @check_local_db
    async def mark_completed(
        self, mission: Mission, completed_at: datetime, *, db: AsyncSession = None
    ) -> Mission:
        return await self.update(
            mission, {"completed": True, "completed_at": completed_at}, db=db
        )

    @check_local_db
    async def save_completion_window(
        self, mission: Mission, record: MissionRecord, *, db: AsyncSession = None
    ) -> Mission:
        """Write the completion fields of ``record`` back onto ``mission``."""
        return await self.update(
            mission,
            {
                "completed": record.completed,
                "completed_at": record.completed_at,
                "reset_date": record.reset_date,
            },
            db=db,
        )
