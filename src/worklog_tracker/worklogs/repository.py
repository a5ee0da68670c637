from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import WorkLogStatus
from .model import DailyLogRow, NewWorkLog, WorkLog


class WorkLogRepository(Protocol):
    """Repository interface for WorkLog.

    Implementations must enforce a unique (user_id, work_date) key and raise
    DuplicateKeyError when an insert violates it.
    """

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[WorkLog]:
        raise NotImplementedError

    def list_for_user_in_range(self, user_id: int, start_date: date, end_date: date) -> Sequence[WorkLog]:
        raise NotImplementedError

    def list_recent_for_user(self, user_id: int, *, limit: int, offset: int = 0) -> Sequence[WorkLog]:
        raise NotImplementedError

    def count_for_user(self, user_id: int) -> int:
        raise NotImplementedError

    def create_log(self, log: NewWorkLog) -> int:
        raise NotImplementedError

    def create_many(self, logs: Sequence[NewWorkLog]) -> int:
        """Insert all logs in one transaction: either every row lands or none."""

        raise NotImplementedError

    def update_end(
        self,
        *,
        log_id: int,
        end_time: datetime,
        duration: Optional[int],
        status: WorkLogStatus,
    ) -> bool:
        """Set the end time only if none is recorded yet. False if nothing changed."""

        raise NotImplementedError

    def list_in_range(self, start_date: date, end_date: date) -> Sequence[WorkLog]:
        raise NotImplementedError

    def list_daily_rows(self, work_date: date) -> Sequence[DailyLogRow]:
        raise NotImplementedError
