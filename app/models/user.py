"""
User model for authentication and character progression.

A user is both a login identity and the player's character: the row carries
the bcrypt credential together with the XP, level, unspent attribute points
and the four character stats.

Architecture:
    User → Mission
    User → UserSession

Invariants (enforced by the progression engine, bounds checked by the database):
    - level == total_xp // XP_PER_LEVEL + 1
    - xp == total_xp % XP_PER_LEVEL
    - xp, total_xp, available_points and every stat are non-negative
"""

from sqlalchemy import CheckConstraint, Column, Index, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

STAT_NAMES = ("strength", "agility", "intelligence", "vitality")

DEFAULT_LEVEL = 1
DEFAULT_AVAILABLE_POINTS = 5
DEFAULT_STAT_VALUE = 10


class User(Base, UUIDMixin, TimestampMixin):
    """
    Registered player account with its progression state.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_username", "username", unique=True),
        CheckConstraint("level >= 1", name="ck_users_level_positive"),
        CheckConstraint("xp >= 0", name="ck_users_xp_non_negative"),
        CheckConstraint("total_xp >= 0", name="ck_users_total_xp_non_negative"),
        CheckConstraint(
            "available_points >= 0", name="ck_users_available_points_non_negative"
        ),
        CheckConstraint(
            "strength >= 0 AND agility >= 0 AND intelligence >= 0 AND vitality >= 0",
            name="ck_users_stats_non_negative",
        ),
    )

    username = Column(
        String(50),
        nullable=False,
        comment="Unique username for user identification and login",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password for secure authentication",
    )

    level = Column(Integer, nullable=False, default=DEFAULT_LEVEL)
    xp = Column(
        Integer,
        nullable=False,
        default=0,
        comment="XP accumulated within the current level",
    )
    total_xp = Column(
        Integer,
        nullable=False,
        default=0,
        comment="Lifetime XP, never decreases",
    )
    available_points = Column(
        Integer,
        nullable=False,
        default=DEFAULT_AVAILABLE_POINTS,
        comment="Unspent attribute points",
    )

    strength = Column(Integer, nullable=False, default=DEFAULT_STAT_VALUE)
    agility = Column(Integer, nullable=False, default=DEFAULT_STAT_VALUE)
    intelligence = Column(Integer, nullable=False, default=DEFAULT_STAT_VALUE)
    vitality = Column(Integer, nullable=False, default=DEFAULT_STAT_VALUE)

    missions = relationship(
        "Mission",
        back_populates="owner",
        cascade="all, delete-orphan",
        doc="Missions owned by this user",
    )

    sessions = relationship(
        "UserSession",
        back_populates="user",
        cascade="all, delete-orphan",
        doc="Active login sessions of this user",
    )

    @property
    def stats(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in STAT_NAMES}

    def __repr__(self):
        return (
            f"<User(id={self.id}, username='{self.username}', "
            f"level={self.level}, total_xp={self.total_xp})>"
        )
