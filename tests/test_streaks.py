"""Tests for habitcore/streaks.py."""

from datetime import date, timedelta

from habitcore.streaks import DayFlag, compute_streaks, streak_progression


START = date(2024, 1, 1)


def _flags(pattern: str) -> list[DayFlag]:
    """'x' ticked, '.' missed, one char per consecutive day from START."""
    return [
        DayFlag(date=START + timedelta(days=i), ticked=c == "x")
        for i, c in enumerate(pattern)
    ]


def _days(*offsets: int) -> set[date]:
    return {START + timedelta(days=i) for i in offsets}


def test_empty_sequence():
    result = compute_streaks([], set(), 7)
    assert result.current_streak == 0
    assert result.longest_streak == 0


def test_all_ticked():
    result = compute_streaks(_flags("xxxxx"))
    assert result.current_streak == 5
    assert result.longest_streak == 5


def test_gap_breaks_streak():
    result = compute_streaks(_flags("xxx.xx"))
    assert result.longest_streak == 3
    assert result.current_streak == 2


def test_missed_trailing_day_resets_current():
    result = compute_streaks(_flags("xxxx."))
    assert result.current_streak == 0
    assert result.longest_streak == 4


def test_current_equals_trailing_ticks_without_freezes():
    for pattern in ["x", ".", "x.x", "..xx", "xx.xxx", "xxx..x.xx", "x.x.x.x"]:
        trailing = len(pattern) - len(pattern.rstrip("x"))
        assert compute_streaks(_flags(pattern), set(), 0).current_streak == trailing


def test_frozen_days_within_limit_extend_streak():
    # 3 ticks, 2 frozen, 1 tick -> 3 + 2 + 1
    result = compute_streaks(_flags("xxx..x"), _days(3, 4), 2)
    assert result.current_streak == 6
    assert result.longest_streak == 6


def test_frozen_days_beyond_limit_break_streak():
    # limit 1: first frozen day survives, the second breaks
    result = compute_streaks(_flags("xxx..x"), _days(3, 4), 1)
    assert result.longest_streak == 4
    assert result.current_streak == 1


def test_max_freeze_zero_disables_freezes():
    result = compute_streaks(_flags("x.x"), _days(1), 0)
    assert result.current_streak == 1
    assert result.longest_streak == 1


def test_freeze_run_resets_after_tick():
    # limit 1, frozen days separated by ticks never accumulate
    result = compute_streaks(_flags("x.x.x.x"), _days(1, 3, 5), 1)
    assert result.current_streak == 7


def test_frozen_day_without_streak_is_neutral():
    result = compute_streaks(_flags(".x"), _days(0), 3)
    assert result.current_streak == 1
    assert result.longest_streak == 1


def test_new_streak_starts_at_next_tick_after_freeze_overflow():
    # limit 1: day 1 frozen ok, day 2 breaks, day 3 frozen with no live streak
    result = compute_streaks(_flags("x...x"), _days(1, 2, 3), 1)
    assert result.current_streak == 1
    assert result.longest_streak == 2


def test_ticked_frozen_day_counts_as_tick():
    result = compute_streaks(_flags("xxx"), _days(1), 0)
    assert result.current_streak == 3


def test_unscheduled_flags_are_skipped():
    flags = [
        DayFlag(date=START, ticked=True),
        DayFlag(date=START + timedelta(days=1), ticked=False, matches_frequency=False),
        DayFlag(date=START + timedelta(days=2), ticked=True),
    ]
    assert compute_streaks(flags).current_streak == 2


def test_streak_progression_matches_prefix_computation():
    flags = _flags("xx.xxx..x")
    frozen = _days(6)
    progression = streak_progression(flags, frozen, 1)
    for i, flag in enumerate(flags):
        prefix = compute_streaks(flags[: i + 1], frozen, 1)
        assert progression[flag.date] == prefix.current_streak
    assert list(progression.values()) == [1, 2, 0, 1, 2, 3, 4, 0, 1]


def test_streak_never_exceeds_scheduled_days():
    flags = _flags("x..xx.x")
    result = compute_streaks(flags, _days(1, 2, 5), 7)
    assert result.longest_streak <= len(flags)
    assert result.current_streak == 7
