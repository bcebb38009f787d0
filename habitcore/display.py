"""Display-entry builder: one annotated record per day of the tracker grid."""

from __future__ import annotations

import logging
from datetime import date

from habitcore.dates import date_range
from habitcore.frequency import matches, validate_frequency
from habitcore.models import (
    DateRange,
    DisplayEntry,
    HabitConfig,
    HabitEntry,
    index_entries,
)
from habitcore.streaks import DayFlag, streak_progression

logger = logging.getLogger(__name__)


def is_ticked(entry: HabitEntry | None, config: HabitConfig) -> bool:
    """Completion habits tick on any entry; value habits need a positive value."""
    if entry is None:
        return False
    if config.tracks_value:
        return entry.value is not None and entry.value > 0
    return True


def is_scheduled(day: date, config: HabitConfig) -> bool:
    """Matches the frequency and falls inside the habit's start/end dates."""
    return matches(day, config.frequency, config.start_date) and config.in_range(day)


def history_start(entries: list[HabitEntry], config: HabitConfig, fallback: date) -> date:
    """First day the habit's history has to be walked from."""
    candidates = [fallback]
    if config.start_date is not None:
        candidates.append(config.start_date)
    if entries:
        candidates.append(min(e.date for e in entries))
    return min(candidates)


def day_flags(
    by_date: dict[date, HabitEntry], config: HabitConfig, start: date, end: date
) -> list[DayFlag]:
    """Ascending flags for the scheduled days in [start, end]."""
    flags = []
    for day in date_range(start, end):
        if not is_scheduled(day, config):
            continue
        flags.append(DayFlag(date=day, ticked=is_ticked(by_date.get(day), config)))
    return flags


def value_intensity(entry: HabitEntry | None, config: HabitConfig, scale: float) -> float:
    """Colour intensity 0..1 for a cell.

    Completion habits are fully coloured when ticked. Value habits scale by
    *scale* (goal, then maxValue, then the largest value shown).
    """
    if not is_ticked(entry, config):
        return 0.0
    if not config.tracks_value:
        return 1.0
    if scale <= 0:
        return 1.0
    return min(1.0, entry.value / scale)


def _intensity_scale(by_date: dict[date, HabitEntry], config: HabitConfig, days: list[date]) -> float:
    if config.goal:
        return config.goal
    if config.max_value:
        return config.max_value
    values = [by_date[d].value for d in days if d in by_date and by_date[d].value]
    return max(values) if values else 0.0


def build_display_entries(
    entries: list[HabitEntry],
    config: HabitConfig,
    display_range: DateRange,
    today: date,
) -> list[DisplayEntry]:
    """Annotated day sequence for *display_range*, in display order.

    The per-day streak is the current streak through that day, computed over
    the whole habit history (not just the visible range) in a single forward
    pass. Unscheduled days carry the streak of the last scheduled day before
    them; days after *today* show 0.
    """
    validate_frequency(config.frequency)
    by_date = index_entries(entries)
    days = display_range.days()
    if not days:
        return []

    walk_end = min(display_range.end, today)
    walk_start = history_start(entries, config, display_range.start)
    progression = streak_progression(
        day_flags(by_date, config, walk_start, walk_end),
        config.frozen_dates,
        config.max_freeze_days,
    )

    # Carry the running streak across unscheduled days.
    carried: dict[date, int] = {}
    run = 0
    for day in date_range(walk_start, walk_end):
        run = progression.get(day, run)
        carried[day] = run

    scale = _intensity_scale(by_date, config, days)
    out = []
    for day in days:
        entry = by_date.get(day)
        out.append(
            DisplayEntry(
                date=day,
                ticked=is_ticked(entry, config),
                value=entry.value if entry else None,
                note=entry.note if entry else None,
                streak=carried.get(day, 0),
                frozen=day in config.frozen_dates,
                outside_range=not config.in_range(day),
                matches_frequency=matches(day, config.frequency, config.start_date),
                intensity=value_intensity(entry, config, scale),
            )
        )
    logger.debug(
        "Built %d display entries (%s..%s), history walked from %s",
        len(out), display_range.start, display_range.end, walk_start,
    )
    return out
