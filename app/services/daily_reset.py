"""
Daily reset policy for daily missions.

A daily mission's completion clears once its last reset anchor falls on an
earlier calendar day than "now". Days are split at local midnight of the
configured reset timezone, not by a rolling 24 hour window, and any number of
elapsed days collapses into a single reset.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, date, datetime, tzinfo
from zoneinfo import ZoneInfo

from app.models import MissionType
from app.schemas import MissionRecord

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def get_reset_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (SQLite drops offsets) as UTC instants."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def calendar_day(value: datetime, tz: tzinfo = UTC) -> date:
    return as_utc(value).astimezone(tz).date()


def needs_daily_reset(mission: MissionRecord, now: datetime, tz: tzinfo = UTC) -> bool:
    if mission.type != MissionType.DAILY:
        return False
    anchor = mission.reset_date or EPOCH
    return calendar_day(anchor, tz) < calendar_day(now, tz)


def reset_daily_missions(
    missions: Sequence[MissionRecord], now: datetime, tz: tzinfo = UTC
) -> list[MissionRecord]:
    """Return ``missions`` with every stale daily mission reopened at ``now``."""
    return [
        mission.model_copy(
            update={"completed": False, "completed_at": None, "reset_date": now}
        )
        if needs_daily_reset(mission, now, tz)
        else mission
        for mission in missions
    ]
