"""
Account service: registration, login and logout.

Sessions live server-side; an access token is only honoured while the
session row it names exists and has not expired. Registration creates the
user, the default mission catalog and the first session in one transaction.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import (
    MissionDBHandler,
    UserDBHandler,
    UserSessionDBHandler,
    check_local_db,
)
from app.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    UnauthenticatedError,
)
from app.models import User
from app.models.user import (
    DEFAULT_AVAILABLE_POINTS,
    DEFAULT_LEVEL,
    DEFAULT_STAT_VALUE,
    STAT_NAMES,
)
from app.schemas import AuthResponse
from app.services.character_service import build_user_profile
from app.services.mission_catalog import build_default_missions
from app.services.mission_service import MissionService
from app.utils.auth import (
    access_token_lifetime,
    burn_password_check,
    create_access_token,
    get_password_hash,
    verify_password,
)
from app.utils.logger import setup_logger

logger = setup_logger("account_service")


class AccountService:
    def __init__(self):
        self.user_db_handler = UserDBHandler()
        self.mission_db_handler = MissionDBHandler()
        self.session_db_handler = UserSessionDBHandler()
        self.mission_service = MissionService()

    async def register(
        self, username: str, password: str, now: datetime | None = None
    ) -> AuthResponse:
        now = now or datetime.now(UTC)
        hashed_password = get_password_hash(password)
        return await self._create_account(username, hashed_password, now)

    @check_local_db
    async def _create_account(
        self,
        username: str,
        hashed_password: str,
        now: datetime,
        *,
        db: AsyncSession = None,
    ) -> AuthResponse:
        existing_user = await self.user_db_handler.get_user_by_username(username, db=db)
        if existing_user:
            raise DuplicateUsernameError(details={"username": username})

        user_data = {
            "username": username,
            "hashed_password": hashed_password,
            "level": DEFAULT_LEVEL,
            "xp": 0,
            "total_xp": 0,
            "available_points": DEFAULT_AVAILABLE_POINTS,
            "created_at": now,
            "updated_at": now,
        }
        user_data.update({name: DEFAULT_STAT_VALUE for name in STAT_NAMES})

        try:
            user = await self.user_db_handler.create(user_data, db=db)
        except IntegrityError as e:
            # Lost a race against a concurrent registration of the same name
            raise DuplicateUsernameError(details={"username": username}) from e

        missions = await self.mission_db_handler.batch_create(
            build_default_missions(user.id, now), db=db
        )
        logger.info(
            f"Registered user '{username}' ({user.id}) with {len(missions)} starting missions"
        )
        return await self._open_session(user, now, db=db)

    async def login(
        self, username: str, password: str, now: datetime | None = None
    ) -> AuthResponse:
        now = now or datetime.now(UTC)
        user = await self.user_db_handler.get_user_by_username(username)

        if user is None:
            burn_password_check(password)
            raise InvalidCredentialsError(details={"username": username})
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError(details={"username": username})

        await self.mission_service.reset_daily_missions_for_user(user.id, now=now)
        return await self._start_session(user.id, now)

    @check_local_db
    async def _start_session(
        self, user_id: uuid.UUID, now: datetime, *, db: AsyncSession = None
    ) -> AuthResponse:
        user = await self.user_db_handler.get(user_id, db=db)
        if user is None:
            raise InvalidCredentialsError()
        removed = await self.session_db_handler.delete_expired(user_id, now, db=db)
        if removed:
            logger.debug(f"Dropped {removed} expired sessions of user {user_id}")
        response = await self._open_session(user, now, db=db)
        logger.info(f"User '{user.username}' logged in")
        return response

    @check_local_db
    async def _open_session(
        self, user: User, now: datetime, *, db: AsyncSession = None
    ) -> AuthResponse:
        expires_at = now + access_token_lifetime()
        session = await self.session_db_handler.create(
            {"user_id": user.id, "expires_at": expires_at, "created_at": now}, db=db
        )
        token = create_access_token(user.id, session.id, expires_at)
        return AuthResponse(
            access_token=token, token_type="bearer", user=build_user_profile(user)
        )

    async def logout(self, session_id: uuid.UUID) -> None:
        removed = await self.session_db_handler.remove(session_id)
        if removed is None:
            raise UnauthenticatedError("Session already ended")
        logger.info(f"Session {session_id} of user {removed.user_id} ended")

    async def resolve_user(
        self, user_id: uuid.UUID, session_id: uuid.UUID, now: datetime | None = None
    ) -> User:
        """Map a token's identity to its user, provided the session is still live."""
        now = now or datetime.now(UTC)
        session = await self.session_db_handler.get_active_session(session_id, now)
        if session is None or session.user_id != user_id:
            raise UnauthenticatedError("Session expired or logged out")

        user = await self.user_db_handler.get(user_id)
        if user is None:
            raise UnauthenticatedError("User not found")
        return user
