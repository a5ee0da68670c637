from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import is_weekend, iter_dates, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT, MAX_HISTORY_PAGE, MAX_WEEK_OFF_DAYS
from ..core.enums import WorkLogStatus
from ..core.exceptions import ConflictError, DuplicateKeyError, InternalError, InvalidRangeError, NotFoundError
from ..users.model import User
from .model import NewWorkLog, WorkLog
from .repository import WorkLogRepository
from .state import derive_duration, week_off_times

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryPage:
    logs: Sequence[WorkLog]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "workLogs": [log.to_dict() for log in self.logs],
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "pages": self.pages,
            },
        }


class AttendanceService:
    """Start/end work sessions and mark week-off days for the calling user.

    Every operation acts on the ``user`` passed in, which the web layer
    resolves from the session. There is no way to act on another user.
    """

    def __init__(self, worklogs: WorkLogRepository):
        self._worklogs = worklogs

    def start_session(self, user: User, *, now: Optional[datetime] = None) -> WorkLog:
        now = now or now_local()
        today = now.date()

        if self._worklogs.get_for_user_and_date(user.user_id, today):
            raise ConflictError("Work already started for today")

        duration, status = derive_duration(WorkLogStatus.ACTIVE, now, None)
        try:
            self._worklogs.create_log(
                NewWorkLog(
                    user_id=user.user_id,
                    work_date=today,
                    start_time=now,
                    end_time=None,
                    duration=duration,
                    status=status,
                )
            )
        except DuplicateKeyError:
            logger.warning("Concurrent start for user %s on %s", user.user_id, today)
            raise ConflictError("Work already started for today")

        logger.info("User %s started work on %s", user.user_id, today)
        return self._reload(user.user_id, today)

    def end_session(self, user: User, *, now: Optional[datetime] = None) -> WorkLog:
        now = now or now_local()
        today = now.date()

        record = self._worklogs.get_for_user_and_date(user.user_id, today)
        if not record:
            raise NotFoundError("No work session found for today")
        if record.end_time is not None:
            raise ConflictError("Work already ended for today")

        duration, status = derive_duration(record.status, record.start_time, now)
        updated = self._worklogs.update_end(
            log_id=record.log_id,
            end_time=now,
            duration=duration,
            status=status,
        )
        if not updated:
            # Another request ended the session between the read and the write.
            raise ConflictError("Work already ended for today")

        logger.info("User %s ended work on %s after %s minutes", user.user_id, today, duration)
        return self._reload(user.user_id, today)

    def mark_week_off(self, user: User, start_date: date, end_date: date) -> int:
        if start_date > end_date:
            raise InvalidRangeError("Start date must be before end date")
        if (end_date - start_date).days + 1 > MAX_WEEK_OFF_DAYS:
            raise InvalidRangeError(f"Week off cannot span more than {MAX_WEEK_OFF_DAYS} days")

        if self._worklogs.list_for_user_in_range(user.user_id, start_date, end_date):
            raise ConflictError(
                "Work logs already exist for some dates in this period. Please select a different period."
            )

        logs = []
        for day in iter_dates(start_date, end_date):
            if is_weekend(day):
                continue
            start, end = week_off_times(day)
            duration, status = derive_duration(WorkLogStatus.WEEK_OFF, start, end)
            logs.append(
                NewWorkLog(
                    user_id=user.user_id,
                    work_date=day,
                    start_time=start,
                    end_time=end,
                    duration=duration,
                    status=status,
                )
            )

        try:
            created = self._worklogs.create_many(logs)
        except DuplicateKeyError:
            logger.warning("Concurrent week-off overlap for user %s in %s..%s", user.user_id, start_date, end_date)
            raise ConflictError(
                "Work logs already exist for some dates in this period. Please select a different period."
            )

        logger.info("User %s marked %s week-off days in %s..%s", user.user_id, created, start_date, end_date)
        return created

    def today_log(self, user: User, *, today: Optional[date] = None) -> Optional[WorkLog]:
        today = today or now_local().date()
        return self._worklogs.get_for_user_and_date(user.user_id, today)

    def history(self, user: User, *, page: int = 1, limit: int = DEFAULT_HISTORY_LIMIT) -> HistoryPage:
        page = page if page and page > 0 else 1
        page = min(page, MAX_HISTORY_PAGE)
        limit = limit if limit and limit > 0 else DEFAULT_HISTORY_LIMIT
        limit = min(limit, MAX_HISTORY_LIMIT)

        logs = self._worklogs.list_recent_for_user(user.user_id, limit=limit, offset=(page - 1) * limit)
        total = self._worklogs.count_for_user(user.user_id)
        return HistoryPage(logs=logs, page=page, limit=limit, total=total)

    def _reload(self, user_id: int, work_date: date) -> WorkLog:
        record = self._worklogs.get_for_user_and_date(user_id, work_date)
        if not record:
            raise InternalError("Work log was written but could not be loaded")
        return record
