from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from .model import WeekOffPeriod


def group_week_off_periods(days: Iterable[date]) -> Optional[list[WeekOffPeriod]]:
    """Merge week-off dates into closed intervals of consecutive days.

    A gap of more than one day starts a new interval; an isolated day becomes
    an interval with start == end. Returns None (not []) when there are no
    dates.
    """
    ordered = sorted(set(days))
    if not ordered:
        return None

    periods: list[WeekOffPeriod] = []
    start = prev = ordered[0]
    for day in ordered[1:]:
        if day - prev == timedelta(days=1):
            prev = day
            continue
        periods.append(WeekOffPeriod(start=start, end=prev))
        start = prev = day
    periods.append(WeekOffPeriod(start=start, end=prev))
    return periods
