"""Metrics aggregation for a single habit.

Rates and averages only look at *evaluated* days: days of the display range
that are not in the future and fall inside the habit's start/end dates.
Months are taken as 30.44 days.
"""

from __future__ import annotations

import logging
import math
from datetime import date

from habitcore.dates import date_range
from habitcore.display import day_flags, history_start, is_scheduled, is_ticked
from habitcore.frequency import validate_frequency
from habitcore.models import (
    DateRange,
    HabitConfig,
    HabitEntry,
    HabitMetrics,
    index_entries,
)
from habitcore.streaks import compute_streaks

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30.44


def _ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def weekly_success_rate(ticks: list[bool], target: int) -> float:
    """Share of 7-day windows meeting *target*, as a percentage.

    *ticks* is one flag per evaluated day, ascending. Windows are laid
    back-to-back ending at the last day; a shorter leading window needs a
    pro-rated target (at least one completion).
    """
    if not ticks:
        return 0.0
    windows = []
    end = len(ticks)
    while end > 0:
        start = max(0, end - DAYS_PER_WEEK)
        windows.append(ticks[start:end])
        end = start
    met = 0
    for window in windows:
        required = target
        if len(window) < DAYS_PER_WEEK:
            required = max(1, math.ceil(target * len(window) / DAYS_PER_WEEK))
        if sum(window) >= required:
            met += 1
    return met / len(windows) * 100


def aggregate_metrics(
    entries: list[HabitEntry],
    config: HabitConfig,
    display_range: DateRange,
    today: date,
) -> HabitMetrics:
    """Compute the metrics summary shown under a habit's tracker."""
    validate_frequency(config.frequency)
    by_date = index_entries(entries)

    evaluated = [
        d
        for d in date_range(display_range.start, min(display_range.end, today))
        if config.in_range(d)
    ]
    scheduled = [d for d in evaluated if is_scheduled(d, config)]
    completed = [d for d in scheduled if is_ticked(by_date.get(d), config)]

    metrics = HabitMetrics(total_completions=len(completed))

    if config.frequency.type == "weekly":
        done = set(completed)
        ticks = [d in done for d in scheduled]
        metrics.success_rate = weekly_success_rate(ticks, config.frequency.target)
    else:
        metrics.success_rate = _ratio(len(completed), len(scheduled)) * 100
    metrics.success_rate = min(100.0, max(0.0, metrics.success_rate))

    metrics.average_per_week = _ratio(len(completed), len(evaluated) / DAYS_PER_WEEK)
    metrics.average_per_month = _ratio(len(completed), len(evaluated) / DAYS_PER_MONTH)

    if config.tracks_value:
        total = sum(by_date[d].value for d in completed)
        metrics.total_value = float(total)
        metrics.average_value = _ratio(total, len(completed))

    # Streaks reflect the whole history, not only the visible window.
    streak_end = today if config.end_date is None else min(today, config.end_date)
    streak_start = history_start(entries, config, display_range.start)
    streaks = compute_streaks(
        day_flags(by_date, config, streak_start, streak_end),
        config.frozen_dates,
        config.max_freeze_days,
    )
    metrics.current_streak = streaks.current_streak
    metrics.longest_streak = streaks.longest_streak

    logger.debug(
        "Metrics over %d evaluated / %d scheduled days: %s",
        len(evaluated), len(scheduled), metrics,
    )
    return metrics
