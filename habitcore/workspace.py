"""Settings root, timezone and "today" helpers."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from habitcore.fileio import read_yaml

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Directory holding settings.yaml (``HABIT_TRACKER_ROOT``, default ~/habits)."""
    return Path(
        os.environ.get("HABIT_TRACKER_ROOT", str(Path.home() / "habits"))
    ).expanduser().resolve()


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.yaml"


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Timezone from settings.yaml, defaulting to UTC."""
    tz_name = read_yaml(settings_path(root)).get("timezone") or "UTC"
    try:
        return ZoneInfo(str(tz_name))
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r in settings, using UTC", tz_name)
        return ZoneInfo("UTC")


def today_local(root: Path | None = None) -> date:
    """Today's calendar day in the user's timezone."""
    return datetime.now(get_user_timezone(root)).date()
