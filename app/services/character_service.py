"""
Character service: profile projection and attribute point allocation.

Allocation takes an intent (one point on one stat) and computes the new
snapshot inside the service, instead of accepting client-computed stats.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import UserDBHandler, check_local_db
from app.exceptions import UnauthenticatedError
from app.models import User
from app.schemas import ProgressionState, UserProfile
from app.services.progression import (
    allocate_attribute_point,
    rank_for_level,
    unlocked_achievements,
    xp_to_next_level,
)
from app.services.user_locks import user_locks
from app.utils.logger import setup_logger

logger = setup_logger("character_service")


def build_user_profile(user: User) -> UserProfile:
    """Public view of a user: progression fields plus derived rank and achievements."""
    state = ProgressionState.model_validate(user)
    return UserProfile(
        id=user.id,
        username=user.username,
        level=state.level,
        xp=state.xp,
        total_xp=state.total_xp,
        xp_to_next_level=xp_to_next_level(state),
        available_points=state.available_points,
        stats=state.stats,
        rank=rank_for_level(state.level),
        achievements=unlocked_achievements(state),
        created_at=user.created_at,
    )


class CharacterService:
    """Reads and spends a user's attribute points."""

    def __init__(self):
        self.user_db_handler = UserDBHandler()

    async def get_profile(self, user_id: uuid.UUID) -> UserProfile:
        user = await self.user_db_handler.get(user_id)
        if user is None:
            raise UnauthenticatedError("User not found")
        return build_user_profile(user)

    async def allocate_point(self, user_id: uuid.UUID, stat_name: str) -> UserProfile:
        async with user_locks.hold(user_id):
            user = await self._allocate_point(user_id, stat_name)
        return build_user_profile(user)

    @check_local_db
    async def _allocate_point(
        self, user_id: uuid.UUID, stat_name: str, *, db: AsyncSession = None
    ) -> User:
        user = await self.user_db_handler.get_user_for_update(user_id, db=db)
        if user is None:
            raise UnauthenticatedError("User not found")

        before = ProgressionState.model_validate(user)
        after = allocate_attribute_point(before, stat_name)
        user = await self.user_db_handler.save_progression(user, after, db=db)

        logger.info(
            f"User {user_id} raised {stat_name} to {getattr(after.stats, stat_name)} "
            f"({after.available_points} points left)"
        )
        return user
