"""
Server-side login sessions.

Every issued access token embeds the id of one of these rows. Logging out
deletes the row, which invalidates the token even before it expires.
"""

from sqlalchemy import Column, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, UtcDateTime, UUIDMixin


class UserSession(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "user_sessions"
    __table_args__ = (Index("ix_user_sessions_user_id", "user_id"),)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    expires_at = Column(
        UtcDateTime(),
        nullable=False,
        comment="Instant after which the session no longer authenticates",
    )

    user = relationship("User", back_populates="sessions")

    def __repr__(self):
        return f"<UserSession(id={self.id}, user_id={self.user_id})>"
