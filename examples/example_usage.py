"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
import sys
from datetime import date

from worklog_tracker.config import get_settings_module
from worklog_tracker.container import build_container


def main(admin_email: str):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    admin = container.access_control.resolve_admin(admin_email)
    report = container.report_service.monthly_report(admin, date.today())
    for summary in report.reports:
        print(summary.user_name, summary.total_hours, summary.attendance_rate, summary.week_off_periods_label)


if __name__ == "__main__":
    main(sys.argv[1])
