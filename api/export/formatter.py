# api/export/formatter.py
"""
CSV export of a selection of reports, and the plain-text report summary.
"""
import csv
import io
from collections.abc import Iterable
from datetime import date

from api.reports.queries import as_utc
from records.report import Report

HEADERS = [
    "Report ID",
    "Technician",
    "Badge Number",
    "Unit ID",
    "Location",
    "Device ID",
    "Card Number",
    "Status",
    "Date",
    "Description",
    "Notes",
]

CSV_MEDIA_TYPE = "text/csv"


def export_filename(today: date) -> str:
    return f"reports_export_{today.isoformat()}.csv"


def report_row(report: Report) -> list[str]:
    return [
        report.id,
        report.technician_name,
        report.badge_number,
        report.unit_id,
        report.location_name,
        report.device_id,
        report.card_number,
        report.status.value,
        as_utc(report.date).strftime("%Y-%m-%d"),
        report.description or "",
        report.notes or "",
    ]


def format_reports_csv(reports: Iterable[Report]) -> str:
    """
    Header row followed by one row per report, in the given order.

    Values containing a comma, quote or line break are quoted (inner quotes
    doubled). Rows are separated by "\\n" with no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(HEADERS)
    writer.writerows(report_row(r) for r in reports)
    return buffer.getvalue().removesuffix("\n")


def format_report_summary(report: Report) -> str:
    """Plain-text summary offered as a download from the report detail screen."""
    when = as_utc(report.date)
    lines = [
        f"Report ID: {report.id}",
        f"Technician: {report.technician_name}",
        f"Badge Number: {report.badge_number}",
        f"Unit ID: {report.unit_id}",
        f"Location: {report.location_name}",
        f"Device ID: {report.device_id}",
        f"Card Number: {report.card_number}",
        f"Status: {report.status.value}",
        f"Date: {when.strftime('%B')} {when.day}, {when.year}",
        f"Description: {report.description or 'N/A'}",
        f"Notes: {report.notes or 'N/A'}",
    ]
    return "\n".join(lines)
