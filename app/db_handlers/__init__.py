from app.db_handlers.base import BaseDBHandler, check_local_db
from app.db_handlers.mission import MissionDBHandler
from app.db_handlers.user import UserDBHandler
from app.db_handlers.user_session import UserSessionDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "UserDBHandler",
    "MissionDBHandler",
    "UserSessionDBHandler",
]
