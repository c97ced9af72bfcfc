"""
Progression engine: pure rules turning mission rewards into character growth.

Every function here takes plain snapshots and returns new ones. Nothing
touches the database, the clock or configuration, so callers decide when and
under which lock the results are persisted.

Rules:
    - level = total_xp // XP_PER_LEVEL + 1
    - xp = total_xp % XP_PER_LEVEL
    - each level gained grants POINTS_PER_LEVEL attribute points
    - spending a point raises one stat by one
"""

from __future__ import annotations

from app.exceptions import InsufficientPointsError, ValidationFailureError
from app.models.user import STAT_NAMES
from app.schemas import Achievement, Notification, ProgressionState

XP_PER_LEVEL = 1000
POINTS_PER_LEVEL = 2

# (exclusive upper level bound, rank); levels past the last bound are rank S
RANK_BANDS: tuple[tuple[int, str], ...] = (
    (10, "E"),
    (20, "D"),
    (30, "C"),
    (40, "B"),
    (50, "A"),
)
TOP_RANK = "S"

DEDICATED_HUNTER_LEVEL = 7
XP_COLLECTOR_TOTAL_XP = 5000
SPECIALIST_STAT_VALUE = 20


def level_for_total_xp(total_xp: int) -> int:
    return total_xp // XP_PER_LEVEL + 1


def apply_mission_reward(state: ProgressionState, xp_reward: int) -> ProgressionState:
    """
    Add ``xp_reward`` to the lifetime XP and rederive level, xp and points.

    Example:
        total_xp=950, level=1, available_points=5 with a reward of 100
        becomes total_xp=1050, level=2, xp=50, available_points=7.
    """
    if xp_reward < 0:
        raise ValidationFailureError(
            "XP reward must not be negative", {"xp_reward": xp_reward}
        )

    new_total_xp = state.total_xp + xp_reward
    new_level = level_for_total_xp(new_total_xp)
    levels_gained = new_level - state.level

    return state.model_copy(
        update={
            "xp": new_total_xp % XP_PER_LEVEL,
            "total_xp": new_total_xp,
            "level": new_level,
            "available_points": state.available_points
            + levels_gained * POINTS_PER_LEVEL,
        }
    )


def allocate_attribute_point(
    state: ProgressionState, stat_name: str
) -> ProgressionState:
    """Spend one available point on ``stat_name``."""
    if stat_name not in STAT_NAMES:
        raise ValidationFailureError(
            f"Unknown stat '{stat_name}'", {"allowed": list(STAT_NAMES)}
        )
    if state.available_points <= 0:
        raise InsufficientPointsError(
            details={"available_points": state.available_points}
        )

    stats = state.stats.model_copy(
        update={stat_name: getattr(state.stats, stat_name) + 1}
    )
    return state.model_copy(
        update={"stats": stats, "available_points": state.available_points - 1}
    )


def xp_to_next_level(state: ProgressionState) -> int:
    return XP_PER_LEVEL - state.xp


def rank_for_level(level: int) -> str:
    for upper_bound, rank in RANK_BANDS:
        if level < upper_bound:
            return rank
    return TOP_RANK


def unlocked_achievements(state: ProgressionState) -> list[Achievement]:
    achievements = []
    if state.level >= DEDICATED_HUNTER_LEVEL:
        achievements.append(
            Achievement(
                key="dedicated_hunter",
                title="Dedicated Hunter",
                description=f"Reached level {state.level}",
            )
        )
    if state.total_xp >= XP_COLLECTOR_TOTAL_XP:
        achievements.append(
            Achievement(
                key="xp_collector",
                title="XP Collector",
                description=f"Earned {state.total_xp:,} total XP",
            )
        )
    if any(getattr(state.stats, name) >= SPECIALIST_STAT_VALUE for name in STAT_NAMES):
        achievements.append(
            Achievement(
                key="specialist",
                title="Specialist",
                description=f"Raised an attribute to {SPECIALIST_STAT_VALUE} or more",
            )
        )
    return achievements


def build_reward_notifications(
    xp_reward: int, before: ProgressionState, after: ProgressionState
) -> list[Notification]:
    """XP-gain notice, followed by a separate level-up notice when one happened."""
    levels_gained = after.level - before.level
    notifications = [
        Notification(
            kind="xp_gained",
            title="Mission completed!",
            message=f"+{xp_reward} XP",
        )
    ]
    if levels_gained > 0:
        notifications.append(
            Notification(
                kind="level_up",
                title="LEVEL UP!",
                message=(
                    f"You reached level {after.level}! "
                    f"+{levels_gained * POINTS_PER_LEVEL} attribute points available."
                ),
            )
        )
    return notifications
