from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator

from ..core.exceptions import InvalidRangeError, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month {value!r} (expected YYYY-MM)")
    return parsed.year, parsed.month


def days_in_month(month: str) -> int:
    year, mon = parse_month(month)
    return calendar.monthrange(year, mon)[1]


def in_month(day: date, month: str) -> bool:
    return day.strftime("%Y-%m") == month


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in [start, end].

    ``date`` carries no time-of-day or zone, so stepping is immune to DST
    shifts and crosses month/year boundaries cleanly.
    """

    if end < start:
        raise InvalidRangeError(f"End date {end.isoformat()} is before start date {start.isoformat()}")
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def normalize_time(value: object) -> str:
    """Normalize an in-time into HH:MM:SS; empty values mean absent."""

    if value is None:
        return "00:00:00"
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")

    raw = str(value).strip()
    if not raw:
        return "00:00:00"
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(raw, fmt).strftime("%H:%M:%S")
        except ValueError:
            continue
    raise ValidationError(f"Invalid time {raw!r} (expected HH:MM or HH:MM:SS)")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
