"""Error kinds raised by the habit engine.

Every error carries a machine-readable ``code`` so callers (the host plugin,
the HTTP adapter) can branch on it without parsing messages.
"""

from __future__ import annotations

from typing import Any


class HabitTrackerError(ValueError):
    """Base class for all engine errors."""

    code: str = "HABIT_TRACKER_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidDate(HabitTrackerError):
    code = "INVALID_DATE"

    def __init__(self, value: Any):
        super().__init__(
            message=f"Invalid date: {value!r} (expected YYYY-MM-DD)",
            details={"value": str(value)},
        )


class InvalidFrequencyConfig(HabitTrackerError):
    code = "INVALID_FREQUENCY"


class InvalidHabitConfig(HabitTrackerError):
    code = "INVALID_HABIT_CONFIG"
