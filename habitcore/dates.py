"""Calendar-day helpers.

Days are plain ``datetime.date`` values: no time-of-day, no timezone.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any

from habitcore.errors import InvalidDate

_ISO_DAY = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_day(text: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string."""
    if not isinstance(text, str):
        raise InvalidDate(text)
    m = _ISO_DAY.match(text.strip())
    if not m:
        raise InvalidDate(text)
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        raise InvalidDate(text) from None


def to_day(value: Any) -> date:
    """Coerce a frontmatter value to a calendar day.

    PyYAML already turns unquoted ISO dates into ``date`` objects, so both
    forms show up in habit files.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_day(value)
    raise InvalidDate(value)


def format_day(day: date) -> str:
    return day.isoformat()


def day_of_week(day: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def days_between(a: date, b: date) -> int:
    """Signed number of whole days from *a* to *b*."""
    return (b - a).days


def date_range(start: date, end: date, reverse: bool = False) -> list[date]:
    """All days from *start* to *end* inclusive; empty if start > end."""
    if start > end:
        return []
    days = [start + timedelta(days=i) for i in range(days_between(start, end) + 1)]
    if reverse:
        days.reverse()
    return days
