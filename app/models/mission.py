"""
Mission model for rewardable units of work owned by a user.

Missions are created once per user from the default catalog at registration.
Their type and reward never change afterwards; only the completion fields
move. Daily missions additionally carry ``reset_date``, the instant their
current completion window was anchored, which the daily reset policy
compares against the current calendar day.

Architecture:
    User → Mission
"""

from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    false,
)
from sqlalchemy.orm import relationship, validates

from app.models.base import Base, TimestampMixin, UtcDateTime, UUIDMixin


class MissionType(str, Enum):
    DAILY = "daily"
    SIDE = "side"
    MAIN = "main"


class Mission(Base, UUIDMixin, TimestampMixin):
    """
    A mission owned by exactly one user.

    - daily: completion clears once per calendar day, on login
    - side / main: one-time, stays completed permanently
    """

    __tablename__ = "missions"
    __table_args__ = (
        Index("ix_missions_user_id", "user_id"),
        Index("ix_missions_type", "type"),
        CheckConstraint("xp_reward > 0", name="ck_missions_xp_reward_positive"),
    )

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user, fixed at creation",
    )

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    icon = Column(String(50), nullable=False, default="")

    type = Column(
        String(10),
        nullable=False,
        comment="Mission type: daily/side/main",
    )

    xp_reward = Column(Integer, nullable=False)

    position = Column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order within the user's catalog",
    )

    completed = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    completed_at = Column(
        UtcDateTime(),
        nullable=True,
        comment="Timestamp of completion, null unless completed",
    )

    reset_date = Column(
        UtcDateTime(),
        nullable=True,
        comment="Anchor of the current daily completion window (daily missions only)",
    )

    owner = relationship(
        "User",
        back_populates="missions",
        doc="User who owns this mission",
    )

    @validates("type")
    def validate_type(self, key, value):
        if isinstance(value, MissionType):
            return value.value
        if value not in {t.value for t in MissionType}:
            raise ValueError(f"Invalid mission type: {value}")
        return value

    @validates("xp_reward")
    def validate_xp_reward(self, key, value):
        if value is None or value <= 0:
            raise ValueError(f"xp_reward must be positive, got {value}")
        return value

    def __repr__(self):
        return (
            f"<Mission(id={self.id}, type='{self.type}', "
            f"title='{self.title}', completed={self.completed})>"
        )
