from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file, session

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.http import SESSION_EMAIL_KEY, login_required
from ..container import Container
from ..core.exceptions import NotFoundError
from . import export

_DAILY_EXPORTS = {
    "csv": (export.daily_csv, "text/csv", "csv"),
    "xlsx": (export.daily_xlsx, export.XLSX_MIMETYPE, "xlsx"),
    "pdf": (export.daily_pdf, "application/pdf", "pdf"),
}

_MONTHLY_EXPORTS = {
    "csv": (export.monthly_csv, "text/csv", "csv"),
    "xlsx": (export.monthly_xlsx, export.XLSX_MIMETYPE, "xlsx"),
    "pdf": (export.monthly_pdf, "application/pdf", "pdf"),
    "detailed-pdf": (lambda report: export.monthly_pdf(report, detailed=True), "application/pdf", "pdf"),
}


def _attachment(content: bytes, *, mimetype: str, filename: str):
    return send_file(io.BytesIO(content), mimetype=mimetype, as_attachment=True, download_name=filename)


def register(app: Flask, container: Container) -> None:
    def current_user():
        # Role is checked by ReportService against the freshly loaded user.
        return container.access_control.resolve(session.get(SESSION_EMAIL_KEY))

    def _daily_report():
        date_s = request.args.get("date")
        day = parse_iso_date(date_s) if date_s else None
        return container.report_service.daily_report(current_user(), day)

    def _monthly_report():
        month_s = request.args.get("month")
        month = parse_month(month_s) if month_s else None
        return container.report_service.monthly_report(current_user(), month)

    @app.route("/api/admin/daily-logs", methods=["GET"], endpoint="admin_daily_logs")
    @login_required
    def admin_daily_logs():
        return jsonify({"success": True, **_daily_report().to_dict()})

    @app.route("/api/admin/monthly-reports", methods=["GET"], endpoint="admin_monthly_reports")
    @login_required
    def admin_monthly_reports():
        return jsonify({"success": True, **_monthly_report().to_dict()})

    @app.route("/api/admin/daily-logs/export/<fmt>", methods=["GET"], endpoint="admin_daily_logs_export")
    @login_required
    def admin_daily_logs_export(fmt: str):
        if fmt not in _DAILY_EXPORTS:
            raise NotFoundError(f"Unsupported export format: {fmt}")
        report = _daily_report()
        render, mimetype, ext = _DAILY_EXPORTS[fmt]
        return _attachment(render(report), mimetype=mimetype, filename=f"daily-logs-{report.day.isoformat()}.{ext}")

    @app.route("/api/admin/monthly-reports/export/<fmt>", methods=["GET"], endpoint="admin_monthly_reports_export")
    @login_required
    def admin_monthly_reports_export(fmt: str):
        if fmt not in _MONTHLY_EXPORTS:
            raise NotFoundError(f"Unsupported export format: {fmt}")
        report = _monthly_report()
        render, mimetype, ext = _MONTHLY_EXPORTS[fmt]
        prefix = "detailed-monthly-report" if fmt == "detailed-pdf" else "monthly-report"
        return _attachment(render(report), mimetype=mimetype, filename=f"{prefix}-{report.month_label}.{ext}")
