from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..worklogs.model import DailyLogRow, WorkLog


@dataclass(frozen=True)
class WeekOffPeriod:
    """Closed interval of consecutive week-off dates."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


@dataclass(frozen=True)
class DailyReport:
    day: date
    logs: Sequence[DailyLogRow]

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "logs": [row.to_dict() for row in self.logs]}


@dataclass(frozen=True)
class MonthlyUserSummary:
    """Per-user aggregate for one calendar month."""

    user_id: int
    user_name: str
    user_email: str
    total_days: int
    total_minutes: int
    total_hours: float
    average_hours_per_day: float
    working_days_in_month: int
    attendance_rate: float
    completed_sessions: int
    incomplete_sessions: int
    week_off_days: int
    week_off_periods: Optional[Sequence[WeekOffPeriod]]
    work_logs: Sequence[WorkLog] = field(default_factory=tuple)

    @property
    def week_off_periods_label(self) -> str:
        if self.week_off_periods is None:
            return "None"
        return ", ".join(str(p) for p in self.week_off_periods)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "userEmail": self.user_email,
            "totalDays": self.total_days,
            "totalHours": self.total_hours,
            "averageHoursPerDay": self.average_hours_per_day,
            "workingDaysInMonth": self.working_days_in_month,
            "attendanceRate": self.attendance_rate,
            "completedSessions": self.completed_sessions,
            "incompleteSessions": self.incomplete_sessions,
            "weekOffDays": self.week_off_days,
            "weekOffPeriods": (
                None
                if self.week_off_periods is None
                else [{"start": p.start.isoformat(), "end": p.end.isoformat()} for p in self.week_off_periods]
            ),
            "workLogs": [
                {
                    "date": log.work_date.isoformat(),
                    "startTime": log.start_time.isoformat(timespec="seconds"),
                    "endTime": log.end_time.isoformat(timespec="seconds") if log.end_time else None,
                    "duration": log.duration,
                }
                for log in self.work_logs
            ],
        }


@dataclass(frozen=True)
class MonthlyReport:
    month: date
    reports: Sequence[MonthlyUserSummary]

    @property
    def month_label(self) -> str:
        return self.month.strftime("%Y-%m")

    def to_dict(self) -> dict:
        return {"month": self.month_label, "reports": [r.to_dict() for r in self.reports]}
