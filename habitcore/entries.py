"""Validation for entries coming from the host's edit dialog."""

from __future__ import annotations

from typing import Any

from habitcore.dates import to_day
from habitcore.errors import InvalidDate
from habitcore.models import HabitConfig


def validate_entry(entry: dict[str, Any], config: HabitConfig) -> list[str]:
    """Validate an entry against its habit and return list of errors (empty if valid)."""
    errors = []
    if "date" not in entry:
        errors.append("Missing required field: date")
    else:
        try:
            to_day(entry["date"])
        except InvalidDate as e:
            errors.append(e.message)

    value = entry.get("value")
    if config.tracks_value:
        if value is None:
            errors.append(f"{config.type} entries require a value")
        elif not isinstance(value, (int, float)) or isinstance(value, bool):
            errors.append("value must be numeric")
        else:
            if value < 0:
                errors.append("value must not be negative")
            if config.max_value is not None and value > config.max_value:
                errors.append(f"value must not exceed {config.max_value:g}")
    elif value is not None:
        errors.append("completion entries do not take a value")

    if "note" in entry and entry["note"] is not None and not isinstance(entry["note"], str):
        errors.append("note must be a string")

    return errors
