"""
Calendar-day arithmetic.

A calendar day is local midnight to local midnight. Naive datetimes are taken
to be local wall-clock time already; aware datetimes are converted to the
local zone before their day is read off.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time


def to_local(ts: datetime) -> datetime:
    """Return ``ts`` as a naive local datetime."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone().replace(tzinfo=None)


def day_of(value: datetime | date) -> date:
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def same_day(a: datetime | date, b: datetime | date) -> bool:
    return day_of(a) == day_of(b)


def day_of_year(value: datetime | date) -> int:
    """1-based ordinal of the day within its year."""
    return day_of(value).timetuple().tm_yday


def month_start(value: datetime | date) -> date:
    day = day_of(value)
    return day.replace(day=1)


def days_in_month(value: datetime | date) -> int:
    day = day_of(value)
    return calendar.monthrange(day.year, day.month)[1]


def shift_month(
    value: datetime | date, delta: int, latest: datetime | date | None = None
) -> date:
    """Move ``delta`` months from the month containing ``value``.

    When ``latest`` is given, moving forward past the month of ``latest`` is
    clamped to the month of ``latest``.
    """
    start = month_start(value)
    index = start.year * 12 + (start.month - 1) + delta
    shifted = date(index // 12, index % 12 + 1, 1)
    if latest is not None and delta > 0 and shifted > month_start(latest):
        return month_start(latest)
    return shifted


def month_bounds(value: datetime | date) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` local datetime range covering the month."""
    start = month_start(value)
    end = shift_month(start, 1)
    return datetime.combine(start, time.min), datetime.combine(end, time.min)

