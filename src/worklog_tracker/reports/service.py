from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from ..access.service import AccessControl
from ..common.datetime_utils import days_in_month, month_bounds, now_local
from ..core.enums import Role, WorkLogStatus
from ..users.model import User
from ..users.repository import UserRepository
from ..worklogs.model import WorkLog
from ..worklogs.repository import WorkLogRepository
from .model import DailyReport, MonthlyReport, MonthlyUserSummary
from .periods import group_week_off_periods


def _round2(value: float) -> float:
    return round(value, 2)


def summarize_month(user: User, logs: Iterable[WorkLog], month: date) -> MonthlyUserSummary:
    """Aggregate one user's WorkLogs for a calendar month.

    Only ``completed`` logs count as worked days. Week-off days are left out
    of both sides of the attendance rate. Rounding is applied to the final
    values only.
    """
    first, last = month_bounds(month)
    in_month = sorted((log for log in logs if first <= log.work_date <= last), key=lambda log: log.work_date)

    completed = [log for log in in_month if log.status == WorkLogStatus.COMPLETED]
    incomplete = [log for log in in_month if log.status == WorkLogStatus.ACTIVE]
    week_off = [log for log in in_month if log.status == WorkLogStatus.WEEK_OFF]

    total_days = len(completed)
    total_minutes = sum(log.duration or 0 for log in completed)
    total_hours = total_minutes / 60
    average = total_hours / total_days if total_days > 0 else 0

    working_days = days_in_month(first)
    rate_base = working_days - len(week_off)
    attendance_rate = total_days / rate_base * 100 if rate_base > 0 else 0

    return MonthlyUserSummary(
        user_id=user.user_id,
        user_name=user.name,
        user_email=user.email,
        total_days=total_days,
        total_minutes=total_minutes,
        total_hours=_round2(total_hours),
        average_hours_per_day=_round2(average),
        working_days_in_month=working_days,
        attendance_rate=_round2(attendance_rate),
        completed_sessions=len(completed),
        incomplete_sessions=len(incomplete),
        week_off_days=len(week_off),
        week_off_periods=group_week_off_periods(log.work_date for log in week_off),
        work_logs=tuple(completed),
    )


class ReportService:
    """Admin-only daily and monthly attendance reports."""

    def __init__(self, worklogs: WorkLogRepository, users: UserRepository, access: AccessControl):
        self._worklogs = worklogs
        self._users = users
        self._access = access

    def daily_report(self, actor: User, day: Optional[date] = None) -> DailyReport:
        self._access.require_admin(actor)
        day = day or now_local().date()
        return DailyReport(day=day, logs=list(self._worklogs.list_daily_rows(day)))

    def monthly_report(self, actor: User, month: Optional[date] = None) -> MonthlyReport:
        self._access.require_admin(actor)
        month = (month or now_local().date()).replace(day=1)
        first, last = month_bounds(month)

        by_user: dict[int, list[WorkLog]] = defaultdict(list)
        for log in self._worklogs.list_in_range(first, last):
            by_user[log.user_id].append(log)

        # Admins are not aggregated.
        users = self._users.list_by_role(Role.USER)
        reports = [summarize_month(u, by_user.get(u.user_id, ()), month) for u in users]
        return MonthlyReport(month=month, reports=reports)
