from datetime import date, datetime, timezone

from api.dashboard.queries import count_by_month, count_by_status, count_by_technician, count_by_unit
from records.report import ReportStatus

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_count_by_status_includes_zero_counts(report_factory):
    reports = [
        report_factory(status=ReportStatus.PENDING),
        report_factory(status=ReportStatus.PENDING),
        report_factory(status=ReportStatus.COMPLETED),
    ]
    counts = count_by_status(reports)
    assert (counts.pending, counts.completed, counts.rejected) == (2, 1, 0)


def test_count_by_status_matches_seed(store):
    counts = count_by_status(store.reports)
    assert counts.pending + counts.completed + counts.rejected == len(store.reports)


def test_count_by_technician_sorted_descending(report_factory):
    reports = [
        report_factory(technician_id="a", technician_name="Ana"),
        report_factory(technician_id="b", technician_name="Budi"),
        report_factory(technician_id="b", technician_name="Budi"),
        report_factory(technician_id="c", technician_name="Citra"),
        report_factory(technician_id="b", technician_name="Budi"),
        report_factory(technician_id="c", technician_name="Citra"),
    ]
    result = count_by_technician(reports)

    assert [(t.technician_id, t.name, t.count) for t in result] == [
        ("b", "Budi", 3),
        ("c", "Citra", 2),
        ("a", "Ana", 1),
    ]


def test_count_by_unit_top_five(report_factory):
    reports = []
    for n, unit in enumerate(["U1", "U2", "U3", "U4", "U5", "U6", "U7"], start=1):
        reports.extend(report_factory(unit_id=unit) for _ in range(n))

    result = count_by_unit(reports)

    assert [(u.unit_id, u.count) for u in result] == [
        ("U7", 7), ("U6", 6), ("U5", 5), ("U4", 4), ("U3", 3),
    ]


def test_count_by_month_trailing_six_months(report_factory):
    reports = [
        report_factory(date=datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc)),
        report_factory(date=datetime(2026, 3, 14, tzinfo=timezone.utc)),
        report_factory(date=datetime(2026, 1, 31, 23, 59, tzinfo=timezone.utc)),
        report_factory(date=datetime(2025, 10, 1, tzinfo=timezone.utc)),
        # Outside the window
        report_factory(date=datetime(2025, 9, 30, 23, 59, tzinfo=timezone.utc)),
    ]

    result = count_by_month(reports, now=NOW)

    assert [m.month for m in result] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
    assert [m.count for m in result] == [1, 0, 0, 1, 0, 2]
    assert result[0].month_start == date(2025, 10, 1)
    assert result[-1].month_start == date(2026, 3, 1)


def test_count_by_month_without_reports():
    result = count_by_month([], now=NOW)
    assert len(result) == 6
    assert all(m.count == 0 for m in result)
