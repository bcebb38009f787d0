"""Streak computation with freeze-day tolerance.

A streak is a run of scheduled days that are either ticked or frozen within
tolerance. Frozen days count toward the streak length, but only while a
streak is alive and for at most ``max_freeze_days`` in a row.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DayFlag:
    date: date
    ticked: bool
    matches_frequency: bool = True


@dataclass(frozen=True)
class StreakResult:
    current_streak: int = 0
    longest_streak: int = 0


def _walk(
    day_flags: Iterable[DayFlag],
    frozen_dates: frozenset[date] | set[date],
    max_freeze_days: int,
):
    """Yield (day, run, longest) after each scheduled day, ascending."""
    run = 0
    freeze_run = 0
    longest = 0
    for flag in day_flags:
        if not flag.matches_frequency:
            continue
        if flag.ticked:
            run += 1
            freeze_run = 0
        elif flag.date in frozen_dates and freeze_run < max_freeze_days and run > 0:
            run += 1
            freeze_run += 1
        elif flag.date in frozen_dates and run == 0:
            # nothing to preserve
            pass
        else:
            longest = max(longest, run)
            run = 0
            freeze_run = 0
        yield flag.date, run, max(longest, run)


def compute_streaks(
    day_flags: Iterable[DayFlag],
    frozen_dates: frozenset[date] | set[date] = frozenset(),
    max_freeze_days: int = 0,
) -> StreakResult:
    """Current and longest streak over an ascending sequence of day flags.

    The current streak is only alive if it survives through the last day in
    the sequence; a missed trailing day yields 0.
    """
    current = 0
    longest = 0
    for _day, run, best in _walk(day_flags, frozen_dates, max_freeze_days):
        current = run
        longest = best
    return StreakResult(current_streak=current, longest_streak=longest)


def streak_progression(
    day_flags: Iterable[DayFlag],
    frozen_dates: frozenset[date] | set[date] = frozenset(),
    max_freeze_days: int = 0,
) -> dict[date, int]:
    """Running current streak after each scheduled day, in one forward pass."""
    return {
        day: run
        for day, run, _best in _walk(day_flags, frozen_dates, max_freeze_days)
    }
