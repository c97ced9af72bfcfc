from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.user_session import UserSession
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.user_session")


class UserSessionDBHandler(BaseDBHandler[UserSession]):
    def __init__(self):
        super().__init__(UserSession)

    @check_local_db
    async def get_active_session(
        self, session_id: uuid.UUID, now: datetime, *, db: AsyncSession = None
    ) -> UserSession | None:
        """Get a session that exists and has not yet expired."""
        try:
            stmt = select(UserSession).where(UserSession.id == session_id)
            result = await db.execute(stmt)
            session = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving session {session_id}: {e}")
            raise

        if session is None or session.expires_at <= now:
            return None
        return session

    @check_local_db
    async def delete_expired(
        self, user_id: uuid.UUID, now: datetime, *, db: AsyncSession = None
    ) -> int:
        """Drop expired sessions of a user; returns the number removed."""
        stmt = delete(UserSession).where(
            UserSession.user_id == user_id, UserSession.expires_at <= now
        )
        result = await db.execute(stmt)
        return result.rowcount or 0
