"""Canonical text rendering of timestamp bounds."""

from __future__ import annotations

from orgtaskcsv.errors import MalformedTimestampError
from orgtaskcsv.org.model import Bound, TimeRange

_LIMITS = {
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 24),
    "minute": (0, 59),
}


def _pad(bound: Bound, part: str) -> str:
    value = getattr(bound, part)
    if value is None:
        raise MalformedTimestampError(f"{part} missing in {bound}")
    low, high = _LIMITS[part]
    if not low <= value <= high:
        raise MalformedTimestampError(f"{part}={value} out of range in {bound}")
    return f"{value:02d}"


def format_bound(bound: Bound) -> str | None:
    """Render *bound* as ``YYYY-MM-DD`` or ``YYYY-MM-DD HH:MM:00``.

    Returns ``None`` when the bound has no year. Raises
    :class:`MalformedTimestampError` for a bound that has a year but cannot
    be rendered in full (an hour without a minute, a missing day, a value
    out of range).
    """
    if bound.year is None:
        return None
    date = f"{bound.year:04d}-{_pad(bound, 'month')}-{_pad(bound, 'day')}"
    if bound.hour is None:
        return date
    return f"{date} {_pad(bound, 'hour')}:{_pad(bound, 'minute')}:00"


def format_start(time_range: TimeRange | None) -> str | None:
    if time_range is None:
        return None
    return format_bound(time_range.start)


def format_end(time_range: TimeRange | None) -> str | None:
    if time_range is None:
        return None
    return format_bound(time_range.end)
