from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import WorkLogStatus


def _fmt_dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="seconds") if value else None


@dataclass(frozen=True)
class WorkLog:
    """Domain entity: one user's attendance record for one calendar day."""

    log_id: int
    user_id: int
    work_date: date
    start_time: datetime
    end_time: Optional[datetime]
    duration: Optional[int]
    status: WorkLogStatus

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "startTime": _fmt_dt(self.start_time),
            "endTime": _fmt_dt(self.end_time),
            "duration": self.duration,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class NewWorkLog:
    """Values for an insert, already passed through derive_duration."""

    user_id: int
    work_date: date
    start_time: datetime
    end_time: Optional[datetime]
    duration: Optional[int]
    status: WorkLogStatus


@dataclass(frozen=True)
class DailyLogRow:
    """Read-model for the daily listing: a WorkLog joined with its owner."""

    log_id: int
    user_id: int
    user_name: str
    user_email: str
    work_date: date
    start_time: datetime
    end_time: Optional[datetime]
    duration: Optional[int]
    status: WorkLogStatus

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "user": {"id": self.user_id, "name": self.user_name, "email": self.user_email},
            "date": self.work_date.isoformat(),
            "startTime": _fmt_dt(self.start_time),
            "endTime": _fmt_dt(self.end_time),
            "duration": self.duration,
            "status": self.status.value,
        }
