"""
Database models for the Life RPG service.

Architecture: User → Mission, User → UserSession.
"""

from app.models.mission import Mission, MissionType
from app.models.user import STAT_NAMES, User
from app.models.user_session import UserSession

__all__ = [
    "User",
    "Mission",
    "MissionType",
    "UserSession",
    "STAT_NAMES",
]
