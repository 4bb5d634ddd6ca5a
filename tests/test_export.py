import csv
import io
from datetime import date, datetime, timedelta, timezone

from api.export.formatter import (
    HEADERS,
    export_filename,
    format_report_summary,
    format_reports_csv,
)
from records.report import ReportStatus

HEADER_LINE = (
    "Report ID,Technician,Badge Number,Unit ID,Location,Device ID,"
    "Card Number,Status,Date,Description,Notes"
)


def test_empty_selection_is_header_only():
    assert format_reports_csv([]) == HEADER_LINE


def test_rows_follow_selection_order(report_factory):
    first = report_factory(
        id="r1", technician_name="Hendra Abdi", badge_number="T001", unit_id="UNIT-1",
        location_name="Jakarta HQ", device_id="DEV-1", card_number="CARD-1",
        status=ReportStatus.COMPLETED, date=datetime(2026, 3, 5, 22, 0, tzinfo=timezone.utc),
        description="Replaced belt", notes=None,
    )
    second = report_factory(id="r2", description=None, notes="Follow up")

    lines = format_reports_csv([first, second]).split("\n")

    assert len(lines) == 3
    assert lines[0] == HEADER_LINE
    assert lines[1] == "r1,Hendra Abdi,T001,UNIT-1,Jakarta HQ,DEV-1,CARD-1,completed,2026-03-05,Replaced belt,"
    assert lines[2].startswith("r2,")
    assert lines[2].endswith(",,Follow up")


def test_values_with_delimiters_are_quoted(report_factory):
    report = report_factory(
        description='Belt, pulley and "idler" replaced',
        notes="line one\nline two",
    )

    output = format_reports_csv([report])
    rows = list(csv.reader(io.StringIO(output)))

    assert rows[0] == HEADERS
    assert len(rows) == 2
    assert rows[1][9] == 'Belt, pulley and "idler" replaced'
    assert rows[1][10] == "line one\nline two"
    assert '"Belt, pulley and ""idler"" replaced"' in output


def test_export_filename():
    assert export_filename(date(2026, 10, 19)) == "reports_export_2026-10-19.csv"


def test_report_summary(report_factory):
    report = report_factory(
        id="abc123",
        technician_name="Hendra Abdi",
        status=ReportStatus.PENDING,
        date=datetime(2026, 3, 5, 9, 0, tzinfo=timezone.utc),
        description=None,
        notes="Checked twice",
    )
    lines = format_report_summary(report).split("\n")

    assert lines[0] == "Report ID: abc123"
    assert "Technician: Hendra Abdi" in lines
    assert "Status: pending" in lines
    assert "Date: March 5, 2026" in lines
    assert "Description: N/A" in lines
    assert lines[-1] == "Notes: Checked twice"


def test_dates_are_formatted_in_utc(report_factory):
    # 23:30 at UTC-5 is already the next day in UTC
    evening = datetime(2025, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    report = report_factory(id="r9", date=evening)

    row = format_reports_csv([report]).split("\n")[1]
    assert row.split(",")[8] == "2025-03-02"
    assert "Date: March 2, 2025" in format_report_summary(report)
