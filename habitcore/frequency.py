"""Frequency matching: is a given day a scheduled day for the habit?

``weekly`` habits have no fixed calendar pattern. Every day is eligible, so
the matcher returns True; the metrics aggregator scores weekly habits per
7-day window instead of per day. Weekly changes how success is scored, not
which days are shown.
"""

from __future__ import annotations

from datetime import date

from habitcore.dates import day_of_week
from habitcore.errors import InvalidFrequencyConfig
from habitcore.models import FREQUENCY_TYPES, FrequencyConfig


def validate_frequency(frequency: FrequencyConfig) -> None:
    """Raise InvalidFrequencyConfig if *frequency* cannot be matched."""
    if frequency.type not in FREQUENCY_TYPES:
        raise InvalidFrequencyConfig(
            f"Unknown frequency type: {frequency.type!r}",
            details={"type": frequency.type},
        )
    if frequency.type == "custom":
        if not frequency.weekdays:
            raise InvalidFrequencyConfig(
                "Custom frequency requires a non-empty weekdays list",
                details={"weekdays": []},
            )
        for wd in frequency.weekdays:
            if not isinstance(wd, int) or isinstance(wd, bool) or not 0 <= wd <= 6:
                raise InvalidFrequencyConfig(
                    f"Invalid weekday: {wd!r} (expected 0-6, 0=Sunday)",
                    details={"weekdays": list(frequency.weekdays)},
                )
    if frequency.type == "weekly" and frequency.target < 1:
        raise InvalidFrequencyConfig(
            "Weekly target must be at least 1",
            details={"target": frequency.target},
        )


def matches(day: date, frequency: FrequencyConfig, start_date: date | None = None) -> bool:
    """True if *day* is a scheduled day for the habit."""
    validate_frequency(frequency)
    if start_date is not None and day < start_date:
        return False
    if frequency.type == "custom":
        return day_of_week(day) in frequency.weekdays
    return True
