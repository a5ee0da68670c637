"""WorkLog state rules.

``active`` -> ``completed`` once an end time is recorded. ``week_off`` is a
terminal state entered only at creation.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import at_time, minutes_between
from ..core.constants import WEEK_OFF_START_TIME
from ..core.enums import WorkLogStatus


def derive_duration(
    status: WorkLogStatus,
    start: datetime,
    end: Optional[datetime],
) -> tuple[Optional[int], WorkLogStatus]:
    """Return ``(duration_minutes, status)`` for the given inputs.

    Called before every write. Duration is never taken from the caller.
    """
    if status == WorkLogStatus.WEEK_OFF:
        return 0, WorkLogStatus.WEEK_OFF

    if end is None:
        return None, WorkLogStatus.ACTIVE

    # Half-minutes round up.
    return int(math.floor(minutes_between(start, end) + 0.5)), WorkLogStatus.COMPLETED


def week_off_times(day: date) -> tuple[datetime, datetime]:
    """Start and end of a week-off record: both at the canonical start time."""
    start = at_time(day, WEEK_OFF_START_TIME)
    return start, start
