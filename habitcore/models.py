"""Typed dataclasses for the habit engine data model.

Input models use from_dict/from_frontmatter to resolve defaults once at the
boundary; output models use to_dict for the host (camelCase keys).
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

from habitcore.dates import date_range, format_day, to_day
from habitcore.errors import InvalidFrequencyConfig, InvalidHabitConfig

if TYPE_CHECKING:
    from habitcore.settings import GlobalSettings

logger = logging.getLogger(__name__)

HABIT_TYPES = {"completion", "duration", "quantity"}
VALUE_TYPES = {"duration", "quantity"}
FREQUENCY_TYPES = {"daily", "weekly", "custom"}

DEFAULT_MAX_FREEZE_DAYS = 7


# ── Entries ───────────────────────────────────────────────────


@dataclass(frozen=True)
class HabitEntry:
    date: date
    value: float | None = None
    note: str | None = None

    @classmethod
    def from_dict(cls, d: Any) -> HabitEntry:
        """Accept ``{date, value?, note?}`` or a bare date (legacy list format)."""
        if not isinstance(d, dict):
            return cls(date=to_day(d))
        value = d.get("value")
        note = d.get("note")
        return cls(
            date=to_day(d.get("date")),
            value=_number(value, "value"),
            note=str(note) if note is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"date": format_day(self.date)}
        if self.value is not None:
            d["value"] = self.value
        if self.note is not None:
            d["note"] = self.note
        return d


def _number(value: Any, field_name: str) -> float | None:
    """Coerce a numeric frontmatter value, rejecting anything non-numeric."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidHabitConfig(
            f"{field_name} must be a number, got {value!r}",
            details={field_name: str(value)},
        )
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidHabitConfig(
            f"{field_name} must be a number, got {value!r}",
            details={field_name: str(value)},
        ) from None


def parse_entries(raw: Any) -> list[HabitEntry]:
    """Parse the frontmatter ``entries`` list."""
    if not raw:
        return []
    if not isinstance(raw, list):
        logger.warning("Ignoring non-list entries field: %r", type(raw).__name__)
        return []
    return [HabitEntry.from_dict(e) for e in raw]


def index_entries(entries: list[HabitEntry]) -> dict[date, HabitEntry]:
    """Date -> entry lookup; a later duplicate replaces an earlier one."""
    return {e.date: e for e in entries}


# ── Configuration ─────────────────────────────────────────────


@dataclass(frozen=True)
class FrequencyConfig:
    type: str = "daily"  # daily, weekly, custom
    target: int = 1  # weekly only
    weekdays: tuple[int, ...] = ()  # custom only, 0=Sunday

    @classmethod
    def from_dict(cls, d: Any) -> FrequencyConfig:
        if not d:
            return cls()
        if isinstance(d, str):
            return cls(type=d.strip().lower())
        if not isinstance(d, dict):
            raise InvalidFrequencyConfig(
                f"Frequency must be a mapping or a type name, got {d!r}",
                details={"frequency": str(d)},
            )
        ftype = str(d.get("type", "daily")).strip().lower()
        target = d.get("target")
        if ftype != "weekly" or target is None:
            target = 1
        elif not isinstance(target, int) or isinstance(target, bool):
            raise InvalidFrequencyConfig(
                f"Weekly target must be an integer, got {target!r}",
                details={"target": target},
            )
        weekdays = d.get("weekdays") or ()
        if not isinstance(weekdays, (list, tuple)):
            weekdays = (weekdays,)
        return cls(
            type=ftype,
            target=target,
            weekdays=tuple(weekdays) if ftype == "custom" else (),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type}
        if self.type == "weekly":
            d["target"] = self.target
        if self.type == "custom":
            d["weekdays"] = list(self.weekdays)
        return d


@dataclass(frozen=True)
class HabitConfig:
    type: str = "completion"  # completion, duration, quantity
    unit: str | None = None
    goal: float | None = None
    max_value: float | None = None
    frequency: FrequencyConfig = field(default_factory=FrequencyConfig)
    start_date: date | None = None
    end_date: date | None = None
    frozen_dates: frozenset[date] = frozenset()
    max_freeze_days: int = DEFAULT_MAX_FREEZE_DAYS
    # host metadata
    title: str = ""
    subtitle: str = ""
    color: str = ""
    ignore: bool = False

    @property
    def tracks_value(self) -> bool:
        return self.type in VALUE_TYPES

    def in_range(self, day: date) -> bool:
        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True

    @classmethod
    def from_frontmatter(
        cls, fm: dict[str, Any] | None, settings: GlobalSettings | None = None
    ) -> HabitConfig:
        """Resolve a habit file's frontmatter into a fully-defaulted config.

        The freeze limit comes from the frontmatter's ``maxFreezeDays`` when
        present, otherwise from the global settings (0 when streak freezes
        are disabled there).
        """
        from habitcore.frequency import validate_frequency

        if not fm or not isinstance(fm, dict):
            fm = {}

        htype = str(fm.get("type") or "completion").strip().lower()
        if htype not in HABIT_TYPES:
            raise InvalidHabitConfig(
                f"Invalid habit type: {htype!r}", details={"type": htype}
            )

        frequency = FrequencyConfig.from_dict(fm.get("frequency"))
        validate_frequency(frequency)

        start = to_day(fm["startDate"]) if fm.get("startDate") else None
        end = to_day(fm["endDate"]) if fm.get("endDate") else None
        if start and end and start > end:
            raise InvalidHabitConfig(
                "startDate is after endDate",
                details={"startDate": format_day(start), "endDate": format_day(end)},
            )

        raw_frozen = fm.get("frozenDates") or []
        if not isinstance(raw_frozen, list):
            logger.warning("Ignoring non-list frozenDates: %r", raw_frozen)
            raw_frozen = []
        frozen = frozenset(to_day(d) for d in raw_frozen)

        if fm.get("maxFreezeDays") is not None:
            max_freeze = fm["maxFreezeDays"]
        elif settings is not None:
            max_freeze = settings.max_freeze_days if settings.enable_streak_freezes else 0
        else:
            max_freeze = DEFAULT_MAX_FREEZE_DAYS
        if not isinstance(max_freeze, int) or isinstance(max_freeze, bool) or max_freeze < 0:
            raise InvalidHabitConfig(
                "maxFreezeDays must be a non-negative integer",
                details={"maxFreezeDays": max_freeze},
            )

        goal = fm.get("goal")
        max_value = fm.get("maxValue")
        config = cls(
            type=htype,
            unit=fm.get("unit"),
            goal=_number(goal, "goal"),
            max_value=_number(max_value, "maxValue"),
            frequency=frequency,
            start_date=start,
            end_date=end,
            frozen_dates=frozen,
            max_freeze_days=max_freeze,
            title=str(fm.get("title", "")),
            subtitle=str(fm.get("subtitle", "")),
            color=str(fm.get("color", "")),
            ignore=bool(fm.get("ignore", False)),
        )
        logger.debug("Resolved habit config: %s", config)
        return config


def habit_color(config: HabitConfig, settings: GlobalSettings | None = None) -> str:
    """Habit's own colour, falling back to the global default."""
    if config.color:
        return config.color
    return settings.default_color if settings is not None else ""


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date
    reverse: bool = False

    def days(self) -> list[date]:
        return date_range(self.start, self.end, self.reverse)

    def __len__(self) -> int:
        return max(0, (self.end - self.start).days + 1)


# ── Outputs ───────────────────────────────────────────────────


@dataclass
class DisplayEntry:
    date: date
    ticked: bool = False
    value: float | None = None
    note: str | None = None
    streak: int = 0
    frozen: bool = False
    outside_range: bool = False
    matches_frequency: bool = True
    intensity: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "date": format_day(self.date),
            "ticked": self.ticked,
            "streak": self.streak,
            "frozen": self.frozen,
            "outsideRange": self.outside_range,
            "matchesFrequency": self.matches_frequency,
            "intensity": round(self.intensity, 3),
        }
        if self.value is not None:
            d["value"] = self.value
        if self.note is not None:
            d["note"] = self.note
        return d


@dataclass
class HabitMetrics:
    current_streak: int = 0
    longest_streak: int = 0
    total_completions: int = 0
    success_rate: float = 0.0
    average_per_week: float = 0.0
    average_per_month: float = 0.0
    total_value: float | None = None
    average_value: float | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "totalCompletions": self.total_completions,
            "successRate": round(self.success_rate, 2),
            "averagePerWeek": round(self.average_per_week, 2),
            "averagePerMonth": round(self.average_per_month, 2),
        }
        if self.total_value is not None:
            d["totalValue"] = round(self.total_value, 2)
        if self.average_value is not None:
            d["averageValue"] = round(self.average_value, 2)
        return d
