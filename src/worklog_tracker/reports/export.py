"""Render report objects to CSV, Excel and PDF bytes.

Pure formatting: every number comes precomputed from the report objects.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Optional

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..common.datetime_utils import now_local
from ..core.constants import EXCEL_SHEET_NAME_MAX
from .model import DailyReport, MonthlyReport

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DAILY_COLUMNS = ["Employee Name", "Email", "Date", "Start Time", "End Time", "Duration (minutes)", "Status"]
MONTHLY_COLUMNS = [
    "Employee Name",
    "Email",
    "Total Days",
    "Total Hours",
    "Average Hours/Day",
    "Attendance Rate (%)",
    "Week Off Days",
    "Week Off Periods",
]
DETAIL_COLUMNS = ["Date", "Start Time", "End Time", "Duration (minutes)", "Duration (hours)"]


def _hhmm(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else "-"


def _hours_label(minutes: Optional[int]) -> str:
    minutes = minutes or 0
    return f"{minutes // 60}h {minutes % 60}m"


def _daily_rows(report: DailyReport) -> list[list]:
    return [
        [
            row.user_name,
            row.user_email,
            row.work_date.isoformat(),
            _hhmm(row.start_time),
            _hhmm(row.end_time),
            "" if row.duration is None else row.duration,
            row.status.value,
        ]
        for row in report.logs
    ]


def _monthly_rows(report: MonthlyReport) -> list[list]:
    return [
        [
            r.user_name,
            r.user_email,
            r.total_days,
            r.total_hours,
            r.average_hours_per_day,
            r.attendance_rate,
            r.week_off_days,
            r.week_off_periods_label,
        ]
        for r in report.reports
    ]


def _to_csv(columns: list[str], rows: list[list]) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(columns)
    writer.writerows(rows)
    # BOM so Excel opens UTF-8 names correctly
    return out.getvalue().encode("utf-8-sig")


def daily_csv(report: DailyReport) -> bytes:
    return _to_csv(DAILY_COLUMNS, _daily_rows(report))


def monthly_csv(report: MonthlyReport) -> bytes:
    return _to_csv(MONTHLY_COLUMNS, _monthly_rows(report))


def _sheet_name(name: str, taken: set[str]) -> str:
    base = (name or "Employee")[:EXCEL_SHEET_NAME_MAX]
    candidate = base
    n = 2
    while candidate.lower() in taken:
        suffix = f" ({n})"
        candidate = base[: EXCEL_SHEET_NAME_MAX - len(suffix)] + suffix
        n += 1
    taken.add(candidate.lower())
    return candidate


def daily_xlsx(report: DailyReport) -> bytes:
    df = pd.DataFrame(_daily_rows(report), columns=DAILY_COLUMNS)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Daily Logs")
    return output.getvalue()


def monthly_xlsx(report: MonthlyReport) -> bytes:
    output = io.BytesIO()
    taken = {"summary"}
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        summary = pd.DataFrame(_monthly_rows(report), columns=MONTHLY_COLUMNS)
        summary.to_excel(writer, index=False, sheet_name="Summary")

        for r in report.reports:
            if not r.work_logs:
                continue
            detail = pd.DataFrame(
                [
                    [
                        log.work_date.isoformat(),
                        _hhmm(log.start_time),
                        _hhmm(log.end_time),
                        log.duration,
                        _hours_label(log.duration),
                    ]
                    for log in r.work_logs
                ],
                columns=DETAIL_COLUMNS,
            )
            detail.to_excel(writer, index=False, sheet_name=_sheet_name(r.user_name, taken))
    return output.getvalue()


def _table(data: list[list]) -> Table:
    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f3a5f")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f2f5f9")]),
            ]
        )
    )
    return table


def _build_pdf(title: str, elements: list) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=36,
        rightMargin=36,
        topMargin=36,
        bottomMargin=36,
        title=title,
    )
    doc.build(elements)
    return buffer.getvalue()


def _header(title: str, subtitle: str) -> list:
    styles = getSampleStyleSheet()
    return [
        Paragraph(title, styles["Title"]),
        Paragraph(subtitle, styles["Normal"]),
        Paragraph(f"Generated on: {now_local().strftime('%d/%m/%Y %H:%M')}", styles["Normal"]),
        Spacer(1, 12),
    ]


def daily_pdf(report: DailyReport) -> bytes:
    title = "Daily Work Logs"
    elements = _header(title, f"Date: {report.day.strftime('%d %B %Y')}")
    if report.logs:
        elements.append(_table([DAILY_COLUMNS] + _daily_rows(report)))
    else:
        elements.append(Paragraph("No work logs for this date.", getSampleStyleSheet()["Normal"]))
    return _build_pdf(title, elements)


def monthly_pdf(report: MonthlyReport, *, detailed: bool = False) -> bytes:
    styles = getSampleStyleSheet()
    title = "Detailed Monthly Attendance Report" if detailed else "Monthly Attendance Report"
    elements = _header(title, f"Month: {report.month.strftime('%B %Y')}")

    total_days = sum(r.total_days for r in report.reports)
    total_hours = round(sum(r.total_minutes for r in report.reports) / 60, 2)
    elements.append(Paragraph("Summary", styles["Heading2"]))
    elements.append(Paragraph(f"Total Employees: {len(report.reports)}", styles["Normal"]))
    elements.append(Paragraph(f"Total Days Worked: {total_days}", styles["Normal"]))
    elements.append(Paragraph(f"Total Hours: {total_hours}h", styles["Normal"]))
    elements.append(Spacer(1, 12))

    if not detailed:
        elements.append(Paragraph("Employee Details", styles["Heading2"]))
        elements.append(_table([MONTHLY_COLUMNS[:7]] + [row[:7] for row in _monthly_rows(report)]))
        return _build_pdf(title, elements)

    for index, r in enumerate(report.reports, start=1):
        elements.append(Paragraph(f"{index}. {r.user_name} ({r.user_email})", styles["Heading3"]))
        elements.append(
            Paragraph(
                f"Total Days: {r.total_days} | Total Hours: {r.total_hours}h | "
                f"Avg: {r.average_hours_per_day}h/day | Attendance: {r.attendance_rate}% | "
                f"Week Off: {r.week_off_periods_label}",
                styles["Normal"],
            )
        )
        if r.work_logs:
            rows = [
                [
                    log.work_date.isoformat(),
                    _hhmm(log.start_time),
                    _hhmm(log.end_time),
                    log.duration,
                    _hours_label(log.duration),
                ]
                for log in r.work_logs
            ]
            elements.append(_table([DETAIL_COLUMNS] + rows))
        elements.append(Spacer(1, 10))
    return _build_pdf(title, elements)
