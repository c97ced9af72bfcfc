"""
Unit tests for the pure progression rules.
"""

import pytest

from app.exceptions import InsufficientPointsError, ValidationFailureError
from app.schemas import CharacterStats, ProgressionState
from app.services.progression import (
    POINTS_PER_LEVEL,
    XP_PER_LEVEL,
    allocate_attribute_point,
    apply_mission_reward,
    build_reward_notifications,
    rank_for_level,
    unlocked_achievements,
    xp_to_next_level,
)


def make_state(total_xp: int = 0, available_points: int = 5, **stats) -> ProgressionState:
    base_stats = {"strength": 10, "agility": 10, "intelligence": 10, "vitality": 10}
    base_stats.update(stats)
    return ProgressionState(
        level=total_xp // XP_PER_LEVEL + 1,
        xp=total_xp % XP_PER_LEVEL,
        total_xp=total_xp,
        available_points=available_points,
        stats=CharacterStats(**base_stats),
    )


@pytest.mark.parametrize(
    "rewards",
    [
        [25, 50, 75, 30, 40],
        [999, 1, 1],
        [500, 500, 500, 500, 500],
        [2500, 0, 1000, 7],
    ],
)
def test_level_and_xp_stay_derived_from_total_xp(rewards):
    state = make_state()
    for reward in rewards:
        previous = state
        state = apply_mission_reward(state, reward)

        assert state.level == state.total_xp // 1000 + 1
        assert state.xp == state.total_xp % 1000
        assert state.level >= previous.level
        assert state.total_xp >= previous.total_xp
        assert state.available_points >= previous.available_points


@pytest.mark.parametrize("split", [[5, 10], [600, 700], [999, 1], [300, 300, 400]])
def test_sequential_rewards_match_a_single_combined_reward(split):
    start = make_state(total_xp=450)

    sequential = start
    for reward in split:
        sequential = apply_mission_reward(sequential, reward)
    combined = apply_mission_reward(start, sum(split))

    assert sequential == combined


def test_crossing_a_level_boundary_grants_points():
    state = make_state(total_xp=950, available_points=5)

    updated = apply_mission_reward(state, 100)

    assert updated.total_xp == 1050
    assert updated.level == 2
    assert updated.xp == 50
    assert updated.available_points == 5 + POINTS_PER_LEVEL


def test_multi_level_jump_grants_points_per_level():
    updated = apply_mission_reward(make_state(available_points=0), 2500)

    assert updated.level == 3
    assert updated.xp == 500
    assert updated.available_points == 2 * POINTS_PER_LEVEL


def test_reward_leaves_stats_untouched():
    state = make_state(strength=14)

    updated = apply_mission_reward(state, 300)

    assert updated.stats == state.stats


def test_negative_reward_is_rejected():
    with pytest.raises(ValidationFailureError):
        apply_mission_reward(make_state(), -1)


def test_allocation_moves_one_point_into_the_stat():
    state = make_state(available_points=2)

    updated = allocate_attribute_point(state, "agility")

    assert updated.stats.agility == 11
    assert updated.stats.strength == 10
    assert updated.available_points == 1
    assert updated.total_xp == state.total_xp


def test_allocation_consumes_exactly_the_available_points():
    state = make_state(available_points=3)
    for _ in range(3):
        state = allocate_attribute_point(state, "vitality")

    assert state.stats.vitality == 13
    assert state.available_points == 0
    with pytest.raises(InsufficientPointsError):
        allocate_attribute_point(state, "vitality")


def test_allocation_without_points_leaves_state_unchanged():
    state = make_state(available_points=0)

    with pytest.raises(InsufficientPointsError):
        allocate_attribute_point(state, "strength")

    assert state.stats.strength == 10
    assert state.available_points == 0


def test_allocation_rejects_unknown_stat():
    with pytest.raises(ValidationFailureError):
        allocate_attribute_point(make_state(), "charisma")


@pytest.mark.parametrize(
    "level, rank",
    [
        (1, "E"),
        (9, "E"),
        (10, "D"),
        (19, "D"),
        (20, "C"),
        (35, "B"),
        (49, "A"),
        (50, "S"),
        (120, "S"),
    ],
)
def test_rank_bands(level, rank):
    assert rank_for_level(level) == rank


def test_xp_to_next_level():
    assert xp_to_next_level(make_state(total_xp=1250)) == 750


def test_achievements_unlock_at_their_thresholds():
    assert unlocked_achievements(make_state()) == []

    # 5000 XP is level 6: collector yes, dedicated hunter not yet
    keys = {a.key for a in unlocked_achievements(make_state(total_xp=5000))}
    assert keys == {"xp_collector"}

    keys = {a.key for a in unlocked_achievements(make_state(total_xp=6000))}
    assert keys == {"dedicated_hunter", "xp_collector"}

    keys = {a.key for a in unlocked_achievements(make_state(total_xp=6500, agility=20))}
    assert keys == {"dedicated_hunter", "xp_collector", "specialist"}


def test_level_up_notification_is_separate_from_xp_notification():
    before = make_state(total_xp=950)
    after = apply_mission_reward(before, 100)

    notifications = build_reward_notifications(100, before, after)

    assert [n.kind for n in notifications] == ["xp_gained", "level_up"]
    assert "+100 XP" in notifications[0].message
    assert "level 2" in notifications[1].message


def test_no_level_up_notification_without_level_gain():
    before = make_state(total_xp=100)
    after = apply_mission_reward(before, 25)

    notifications = build_reward_notifications(25, before, after)

    assert [n.kind for n in notifications] == ["xp_gained"]
