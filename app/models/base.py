"""
Base configurations and mixins for database models.

Provides the declarative base shared by every model in the Life RPG service,
together with the UUID primary key and timestamp mixins. Column types are
chosen to work on both PostgreSQL and SQLite.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Uuid, inspect
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import declarative_base


def utc_now() -> datetime:
    return datetime.now(UTC)


class UtcDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp on every backend.

    SQLite stores datetimes without an offset; values are converted to UTC
    on the way in and read back with UTC attached, so callers always see
    aware instants. Naive input is taken to already be UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class CustomBase:
    """
    Custom base class for SQLAlchemy models with enhanced serialization.

    This class provides a `to_dict` method that automatically converts
    model instances to dictionaries, handling special data types like
    UUID and datetime objects appropriately.
    """

    def to_dict(self) -> dict:
        d = {}
        if not self:
            return d
        for column in inspect(self).mapper.column_attrs:
            value = getattr(self, column.key)
            if isinstance(value, uuid.UUID):
                d[column.key] = str(value)
            elif isinstance(value, datetime):
                d[column.key] = value.isoformat()
            else:
                d[column.key] = value
        return d


# Create the base class for all models
Base = declarative_base(cls=CustomBase)


class TimestampMixin:
    """
    Mixin class that adds creation and modification timestamps to models.

    Values are produced on the application side in UTC so that freshly
    flushed objects carry them without a round trip to the database.
    """

    created_at = Column(
        UtcDateTime(),
        default=utc_now,
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        UtcDateTime(),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class UUIDMixin:
    """
    Mixin class that adds a UUID4 primary key to models.
    """

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key using UUID4 format",
    )


__all__ = ["Base", "TimestampMixin", "UUIDMixin", "UtcDateTime", "utc_now"]
