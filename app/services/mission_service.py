"""
Mission service: listing, completion and the login-time daily reset.

Completion marks the mission done and applies its XP reward to the owner in
a single transaction, while holding the owner's progression lock, so that
concurrent completions by the same user cannot lose each other's XP.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db_handlers import MissionDBHandler, UserDBHandler, check_local_db
from app.exceptions import NotFoundOrAlreadyCompletedError
from app.models import MissionType
from app.schemas import MissionCompletionResponse, MissionRecord, ProgressionState
from app.services.character_service import build_user_profile
from app.services.daily_reset import get_reset_timezone, reset_daily_missions
from app.services.progression import (
    POINTS_PER_LEVEL,
    apply_mission_reward,
    build_reward_notifications,
)
from app.services.user_locks import user_locks
from app.utils.logger import setup_logger

logger = setup_logger("mission_service")


class MissionService:
    def __init__(self):
        self.mission_db_handler = MissionDBHandler()
        self.user_db_handler = UserDBHandler()
        self.reset_timezone = get_reset_timezone(settings.daily_reset_timezone)

    async def list_missions(
        self, user_id: uuid.UUID, mission_type: MissionType | None = None
    ) -> list[MissionRecord]:
        missions = await self.mission_db_handler.get_user_missions(
            user_id, mission_type
        )
        return [MissionRecord.model_validate(mission) for mission in missions]

    async def complete_mission(
        self,
        mission_id: uuid.UUID,
        user_id: uuid.UUID,
        now: datetime | None = None,
    ) -> MissionCompletionResponse:
        now = now or datetime.now(UTC)
        async with user_locks.hold(user_id):
            return await self._complete_mission(mission_id, user_id, now)

    @check_local_db
    async def _complete_mission(
        self,
        mission_id: uuid.UUID,
        user_id: uuid.UUID,
        now: datetime,
        *,
        db: AsyncSession = None,
    ) -> MissionCompletionResponse:
        mission = await self.mission_db_handler.get_owned_mission(
            mission_id, user_id, for_update=True, db=db
        )
        # Absent, foreign and already-completed missions share one error
        if mission is None or mission.completed:
            raise NotFoundOrAlreadyCompletedError(
                details={"mission_id": str(mission_id), "user_id": str(user_id)}
            )

        user = await self.user_db_handler.get_user_for_update(user_id, db=db)
        if user is None:
            raise NotFoundOrAlreadyCompletedError(
                details={"mission_id": str(mission_id), "user_id": str(user_id)}
            )

        before = ProgressionState.model_validate(user)
        after = apply_mission_reward(before, mission.xp_reward)

        mission = await self.mission_db_handler.mark_completed(mission, now, db=db)
        user = await self.user_db_handler.save_progression(user, after, db=db)

        levels_gained = after.level - before.level
        logger.info(
            f"User {user_id} completed mission {mission_id} (+{mission.xp_reward} XP, "
            f"total {after.total_xp})"
        )
        if levels_gained > 0:
            logger.info(f"User {user_id} leveled up to {after.level}")

        return MissionCompletionResponse(
            mission=MissionRecord.model_validate(mission),
            user=build_user_profile(user),
            xp_gained=mission.xp_reward,
            levels_gained=levels_gained,
            points_gained=levels_gained * POINTS_PER_LEVEL,
            notifications=build_reward_notifications(mission.xp_reward, before, after),
        )

    async def reset_daily_missions_for_user(
        self, user_id: uuid.UUID, now: datetime | None = None
    ) -> int:
        """Reopen the user's stale daily missions; returns how many were reset."""
        now = now or datetime.now(UTC)
        async with user_locks.hold(user_id):
            return await self._reset_daily_missions(user_id, now)

    @check_local_db
    async def _reset_daily_missions(
        self, user_id: uuid.UUID, now: datetime, *, db: AsyncSession = None
    ) -> int:
        missions = await self.mission_db_handler.get_user_missions(
            user_id, MissionType.DAILY, db=db
        )
        records = [MissionRecord.model_validate(mission) for mission in missions]
        refreshed = reset_daily_missions(records, now, self.reset_timezone)

        reset_count = 0
        for mission, before, after in zip(missions, records, refreshed):
            if after is before:
                continue
            await self.mission_db_handler.save_completion_window(mission, after, db=db)
            reset_count += 1

        if reset_count:
            logger.info(f"Reset {reset_count} daily missions for user {user_id}")
        return reset_count
