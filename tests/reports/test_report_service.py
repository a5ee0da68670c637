from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from worklog_tracker.core.enums import WorkLogStatus
from worklog_tracker.core.exceptions import ForbiddenError
from worklog_tracker.reports.service import summarize_month
from worklog_tracker.worklogs.model import WorkLog


def _log(log_id, user, day: date, minutes=None, status=WorkLogStatus.COMPLETED) -> WorkLog:
    start = datetime.combine(day, datetime.min.time()).replace(hour=9)
    if status == WorkLogStatus.WEEK_OFF:
        return WorkLog(log_id, user.user_id, day, start, start, 0, status)
    if status == WorkLogStatus.ACTIVE:
        return WorkLog(log_id, user.user_id, day, start, None, None, status)
    return WorkLog(log_id, user.user_id, day, start, start + timedelta(minutes=minutes), minutes, status)


def test_totals_and_average_for_two_completed_logs(alice):
    logs = [_log(1, alice, date(2024, 6, 3), 90), _log(2, alice, date(2024, 6, 4), 30)]

    s = summarize_month(alice, logs, date(2024, 6, 1))

    assert s.total_days == 2
    assert s.total_minutes == 120
    assert s.total_hours == 2.0
    assert s.average_hours_per_day == 1.0


def test_zero_completed_logs_gives_zero_average(alice):
    s = summarize_month(alice, [_log(1, alice, date(2024, 6, 3), status=WorkLogStatus.ACTIVE)], date(2024, 6, 1))

    assert s.total_days == 0
    assert s.total_hours == 0
    assert s.average_hours_per_day == 0
    assert s.attendance_rate == 0
    assert s.incomplete_sessions == 1
    assert s.week_off_periods is None


def test_extended_fields(alice):
    logs = [
        _log(1, alice, date(2024, 6, 3), 480),
        _log(2, alice, date(2024, 6, 4), status=WorkLogStatus.ACTIVE),
        _log(3, alice, date(2024, 6, 10), status=WorkLogStatus.WEEK_OFF),
        _log(4, alice, date(2024, 6, 11), status=WorkLogStatus.WEEK_OFF),
        _log(5, alice, date(2024, 6, 20), status=WorkLogStatus.WEEK_OFF),
    ]

    s = summarize_month(alice, logs, date(2024, 6, 1))

    assert s.working_days_in_month == 30
    assert s.completed_sessions == 1
    assert s.incomplete_sessions == 1
    assert s.week_off_days == 3
    # Week-off days leave the denominator: 1 / (30 - 3)
    assert s.attendance_rate == round(100 / 27, 2)
    assert s.week_off_periods_label == "2024-06-10 to 2024-06-11, 2024-06-20 to 2024-06-20"
    assert [log.log_id for log in s.work_logs] == [1]


def test_attendance_rate_against_calendar_days(alice):
    logs = [_log(i, alice, date(2024, 2, i), 60) for i in range(1, 8)]

    s = summarize_month(alice, logs, date(2024, 2, 1))

    assert s.working_days_in_month == 29
    assert s.attendance_rate == round(7 / 29 * 100, 2)


def test_logs_outside_month_are_ignored(alice):
    logs = [_log(1, alice, date(2024, 5, 31), 60), _log(2, alice, date(2024, 6, 1), 60)]

    s = summarize_month(alice, logs, date(2024, 6, 1))

    assert s.total_days == 1


def test_monthly_report_excludes_admins(container, worklogs_repo, alice, admin):
    container.attendance_service.start_session(admin, now=datetime(2024, 6, 3, 9, 0))
    container.attendance_service.end_session(admin, now=datetime(2024, 6, 3, 10, 0))
    container.attendance_service.start_session(alice, now=datetime(2024, 6, 3, 9, 0))
    container.attendance_service.end_session(alice, now=datetime(2024, 6, 3, 10, 30))

    report = container.report_service.monthly_report(admin, date(2024, 6, 15))

    assert report.month_label == "2024-06"
    assert [r.user_email for r in report.reports] == ["alice@example.com"]
    assert report.reports[0].total_hours == 1.5


def test_monthly_report_lists_users_without_logs(container, users_repo, alice, admin):
    users_repo.add("carol@example.com", "Carol")

    report = container.report_service.monthly_report(admin, date(2024, 6, 1))

    assert [r.user_name for r in report.reports] == ["Alice", "Carol"]
    assert all(r.total_days == 0 for r in report.reports)


def test_daily_report_lists_all_logs_for_the_day(container, alice, admin):
    container.attendance_service.start_session(alice, now=datetime(2024, 6, 3, 9, 0))
    container.attendance_service.mark_week_off(admin, date(2024, 6, 3), date(2024, 6, 3))
    container.attendance_service.start_session(alice, now=datetime(2024, 6, 4, 9, 0))

    report = container.report_service.daily_report(admin, date(2024, 6, 3))

    assert [(r.user_name, r.status) for r in report.logs] == [
        ("Alice", WorkLogStatus.ACTIVE),
        ("Boss", WorkLogStatus.WEEK_OFF),
    ]
    assert report.to_dict()["logs"][0]["user"]["email"] == "alice@example.com"


def test_non_admin_cannot_read_reports(container, alice):
    with pytest.raises(ForbiddenError):
        container.report_service.monthly_report(alice, date(2024, 6, 1))
    with pytest.raises(ForbiddenError):
        container.report_service.daily_report(alice, date(2024, 6, 3))
