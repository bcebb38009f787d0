"""Global tracker settings: defaults, validation, YAML persistence.

settings.yaml uses the same camelCase keys the host plugin stores.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields, replace
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from habitcore.dates import to_day
from habitcore.errors import HabitTrackerError
from habitcore.fileio import read_yaml, write_yaml_atomic
from habitcore.models import DateRange
from habitcore.workspace import settings_path

logger = logging.getLogger(__name__)

TODAY_INDICATORS = {"border", "emoji", "highlight", "none"}
STORAGE_LOCATIONS = {"habit-file", "daily-note"}

_KEYS = {
    "path": "path",
    "days_to_show": "daysToShow",
    "debug": "debug",
    "match_line_length": "matchLineLength",
    "default_color": "defaultColor",
    "show_streaks": "showStreaks",
    "reverse_order": "reverseOrder",
    "today_indicator": "todayIndicator",
    "storage_location": "storageLocation",
    "show_metrics": "showMetrics",
    "auto_refresh": "autoRefresh",
    "enable_streak_freezes": "enableStreakFreezes",
    "max_freeze_days": "maxFreezeDays",
    "show_value_intensity": "showValueIntensity",
    "timezone": "timezone",
}


@dataclass(frozen=True)
class GlobalSettings:
    path: str = ""
    days_to_show: int = 21
    debug: bool = False
    match_line_length: bool = True
    default_color: str = ""
    show_streaks: bool = True
    reverse_order: bool = False
    today_indicator: str = "border"  # border, emoji, highlight, none
    storage_location: str = "habit-file"  # habit-file, daily-note
    show_metrics: bool = True
    auto_refresh: bool = True
    enable_streak_freezes: bool = True
    max_freeze_days: int = 7
    show_value_intensity: bool = True
    timezone: str = "UTC"

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> GlobalSettings:
        """Overlay stored values on the defaults; invalid values fall back."""
        if not d or not isinstance(d, dict):
            return cls()
        settings, errors = update_settings(cls(), d)
        for err in errors:
            logger.warning("Ignoring stored setting: %s", err)
        return settings

    def to_dict(self) -> dict[str, Any]:
        return {_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


# ── Validation ────────────────────────────────────────────────


CSS_NAMED_COLORS = frozenset("""
aliceblue antiquewhite aqua aquamarine azure beige bisque black blanchedalmond
blue blueviolet brown burlywood cadetblue chartreuse chocolate coral
cornflowerblue cornsilk crimson cyan darkblue darkcyan darkgoldenrod darkgray
darkgreen darkgrey darkkhaki darkmagenta darkolivegreen darkorange darkorchid
darkred darksalmon darkseagreen darkslateblue darkslategray darkslategrey
darkturquoise darkviolet deeppink deepskyblue dimgray dimgrey dodgerblue
firebrick floralwhite forestgreen fuchsia gainsboro ghostwhite gold goldenrod
gray green greenyellow grey honeydew hotpink indianred indigo ivory khaki
lavender lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
lightgoldenrodyellow lightgray lightgreen lightgrey lightpink lightsalmon
lightseagreen lightskyblue lightslategray lightslategrey lightsteelblue
lightyellow lime limegreen linen magenta maroon mediumaquamarine mediumblue
mediumorchid mediumpurple mediumseagreen mediumslateblue mediumspringgreen
mediumturquoise mediumvioletred midnightblue mintcream mistyrose moccasin
navajowhite navy oldlace olive olivedrab orange orangered orchid palegoldenrod
palegreen paleturquoise palevioletred papayawhip peachpuff peru pink plum
powderblue purple rebeccapurple red rosybrown royalblue saddlebrown salmon
sandybrown seagreen seashell sienna silver skyblue slateblue slategray
slategrey snow springgreen steelblue tan teal thistle tomato turquoise violet
wheat white whitesmoke yellow yellowgreen transparent currentcolor
""".split())

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR = re.compile(r"^(?:rgba?|hsla?)\(\s*[\d.%\s,/+-]+\)$", re.IGNORECASE)


def is_valid_css_color(value: str) -> bool:
    """Hex, rgb()/rgba()/hsl()/hsla() or a CSS named colour."""
    v = (value or "").strip()
    if not v:
        return False
    return bool(_HEX_COLOR.match(v) or _FUNC_COLOR.match(v)) or v.lower() in CSS_NAMED_COLORS


def _check(name: str, value: Any) -> str | None:
    """Return an error message for a bad value, or None."""
    default = getattr(GlobalSettings(), name)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            return f"{_KEYS[name]} must be a boolean"
        return None
    if isinstance(default, int):
        if not isinstance(value, int) or isinstance(value, bool):
            return f"{_KEYS[name]} must be an integer"
        if name == "days_to_show" and value < 1:
            return "daysToShow must be at least 1"
        if name == "max_freeze_days" and value < 0:
            return "maxFreezeDays must be 0 or more"
        return None
    if not isinstance(value, str):
        return f"{_KEYS[name]} must be a string"
    if name == "today_indicator" and value not in TODAY_INDICATORS:
        return f"Invalid todayIndicator: {value}"
    if name == "storage_location" and value not in STORAGE_LOCATIONS:
        return f"Invalid storageLocation: {value}"
    if name == "default_color" and value and not is_valid_css_color(value):
        return f"Invalid defaultColor: {value}"
    return None


def update_settings(
    settings: GlobalSettings, updates: dict[str, Any]
) -> tuple[GlobalSettings, list[str]]:
    """Apply camelCase *updates*. Returns (new_settings, errors).

    Valid keys are applied even when others fail; unknown keys are ignored.
    """
    by_key = {v: k for k, v in _KEYS.items()}
    changes: dict[str, Any] = {}
    errors = []
    for key, value in updates.items():
        name = by_key.get(key)
        if name is None:
            continue
        err = _check(name, value)
        if err:
            errors.append(err)
            continue
        changes[name] = value
    return replace(settings, **changes), errors


# ── Persistence ───────────────────────────────────────────────


def load_settings(root: Path | None = None) -> GlobalSettings:
    """Load settings.yaml over the defaults."""
    return GlobalSettings.from_dict(read_yaml(settings_path(root)))


def save_settings(settings: GlobalSettings, root: Path | None = None) -> None:
    """Save settings back to settings.yaml atomically."""
    write_yaml_atomic(settings_path(root), settings.to_dict())
    logger.debug("Saved settings: %s", settings)


def configure_logging(settings: GlobalSettings) -> None:
    """Debug mode turns on DEBUG output for the engine's loggers."""
    level = logging.DEBUG if settings.debug else logging.WARNING
    logging.getLogger("habitcore").setLevel(level)


# ── Display range ─────────────────────────────────────────────


def resolve_display_range(
    today: date,
    days_to_show: int = 21,
    first_displayed: Any = None,
    last_displayed: Any = None,
    reverse: bool = False,
) -> DateRange:
    """Window of days a tracker shows.

    Ends at *last_displayed* (default today); starts at *first_displayed*
    or ``days_to_show - 1`` days before the end.
    """
    if days_to_show < 1:
        raise HabitTrackerError(
            "daysToShow must be at least 1", details={"daysToShow": days_to_show}
        )
    end = to_day(last_displayed) if last_displayed else today
    if first_displayed:
        start = to_day(first_displayed)
    else:
        start = end - timedelta(days=days_to_show - 1)
    return DateRange(start=start, end=end, reverse=reverse)
