from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid month {value!r}, expected YYYY-MM")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(month: date) -> tuple[date, date]:
    first = month.replace(day=1)
    last = first.replace(day=days_in_month(first))
    return first, last


def days_in_month(month: date) -> int:
    return calendar.monthrange(month.year, month.month)[1]


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar date in [start, end]."""
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def at_time(day: date, t: time) -> datetime:
    return datetime.combine(day, t)


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60
