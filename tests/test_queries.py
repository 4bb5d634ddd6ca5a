from datetime import date, datetime, timedelta, timezone

import pytest

from api.reports.queries import (
    ReportQuery,
    TimePeriod,
    apply_query,
    by_date_range,
    by_location,
    by_period,
    by_status,
    by_technician,
    by_unit,
    newest_first,
    period_bounds,
    search,
    search_locations,
    search_users,
    unique_unit_ids,
)
from records.report import ReportStatus
from records.user import UserRole

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def ids(reports):
    return [r.id for r in reports]


def test_status_filter(store):
    pending = by_status(store.reports, ReportStatus.PENDING)
    assert pending
    assert all(r.status == ReportStatus.PENDING for r in pending)
    assert by_status(store.reports, "all") == store.reports
    assert by_status(store.reports, None) == store.reports


def test_technician_then_status_equals_status_then_technician(store):
    technician_id = store.reports[0].technician_id

    first = newest_first(by_status(by_technician(store.reports, technician_id), "pending"))
    second = newest_first(by_technician(by_status(store.reports, "pending"), technician_id))

    assert ids(first) == ids(second)
    assert all(r.technician_id == technician_id and r.status == ReportStatus.PENDING for r in first)


def test_search_matches_any_field_case_insensitive(report_factory):
    reports = [
        report_factory(technician_name="Budi Santoso"),
        report_factory(badge_number="B-77"),
        report_factory(card_number="CARD-XYZ"),
        report_factory(description="Belt replaced"),
    ]
    assert ids(search(reports, "budi")) == [reports[0].id]
    assert ids(search(reports, "b-77")) == [reports[1].id]
    assert ids(search(reports, "card-xyz")) == [reports[2].id]
    assert ids(search(reports, "BELT")) == [reports[3].id]


def test_search_on_notes_finds_single_report(report_factory):
    reports = [report_factory(notes=f"ordinary note {i}") for i in range(5)]
    target = report_factory(notes="Bearing noise traced to loose bolt")
    reports.insert(2, target)

    assert ids(search(reports, "LOOSE BOLT")) == [target.id]


def test_empty_search_passes_through(report_factory):
    reports = [report_factory(), report_factory()]
    assert search(reports, "") == reports
    assert search(reports, "   ") == reports
    assert search(reports, None) == reports


def test_date_range_inclusive_by_day(report_factory):
    start_edge = report_factory(date=datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc))
    end_edge = report_factory(date=datetime(2026, 3, 10, 23, 59, 59, tzinfo=timezone.utc))
    before = report_factory(date=datetime(2026, 2, 28, 23, 59, 59, tzinfo=timezone.utc))
    after = report_factory(date=datetime(2026, 3, 11, 0, 0, tzinfo=timezone.utc))
    reports = [start_edge, end_edge, before, after]

    result = by_date_range(reports, date(2026, 3, 1), date(2026, 3, 10))
    assert ids(result) == [start_edge.id, end_edge.id]


def test_date_range_single_bound(report_factory):
    boundary = datetime(2026, 3, 5, 8, 30, tzinfo=timezone.utc)
    at = report_factory(date=boundary)
    earlier = report_factory(date=boundary - timedelta(seconds=1))
    later = report_factory(date=boundary + timedelta(seconds=1))
    reports = [at, earlier, later]

    assert ids(by_date_range(reports, start=boundary)) == [at.id, later.id]
    assert ids(by_date_range(reports, end=boundary)) == [at.id, earlier.id]
    assert by_date_range(reports) == reports


@pytest.mark.parametrize("period,days", [
    (TimePeriod.TODAY, 0),
    (TimePeriod.LAST_7_DAYS, 6),
    (TimePeriod.LAST_30_DAYS, 29),
])
def test_period_bounds(period, days):
    lower, upper = period_bounds(period, NOW)
    assert lower == datetime(2026, 3, 15, tzinfo=timezone.utc) - timedelta(days=days)
    assert upper.date() == NOW.date()
    assert upper > NOW


def test_last_7_days_for_technician_newest_first(report_factory):
    today = report_factory(technician_id="X", date=NOW)
    yesterday = report_factory(technician_id="X", date=NOW - timedelta(days=1))
    old = report_factory(technician_id="X", date=NOW - timedelta(days=40))
    other = report_factory(technician_id="Y", date=NOW)
    reports = [old, yesterday, other, today]

    query = ReportQuery(technician_id="X", period=TimePeriod.LAST_7_DAYS)
    assert ids(apply_query(reports, query, now=NOW)) == [today.id, yesterday.id]


def test_period_uses_current_clock(report_factory):
    recent = report_factory(date=datetime.now(timezone.utc) - timedelta(hours=1))
    stale = report_factory(date=datetime.now(timezone.utc) - timedelta(days=10))
    assert ids(by_period([recent, stale], "last_7_days")) == [recent.id]
    assert by_period([recent, stale], None) == [recent, stale]


def test_location_and_unit_filters(report_factory):
    a = report_factory(location_id="L1", unit_id="UNIT-A")
    b = report_factory(location_id="L2", unit_id="UNIT-A")
    c = report_factory(location_id="L1", unit_id="UNIT-B")

    assert ids(by_location([a, b, c], "L1")) == [a.id, c.id]
    assert ids(by_unit([a, b, c], "UNIT-A")) == [a.id, b.id]
    assert by_unit([a, b, c], "all") == [a, b, c]


def test_apply_query_combines_filters(report_factory):
    match = report_factory(
        technician_id="X", status=ReportStatus.REJECTED, location_id="L1",
        notes="missing photo", date=NOW - timedelta(days=2),
    )
    wrong_status = report_factory(technician_id="X", location_id="L1", notes="missing photo", date=NOW)
    wrong_location = report_factory(
        technician_id="X", status=ReportStatus.REJECTED, location_id="L2", notes="missing photo", date=NOW,
    )
    reports = [match, wrong_status, wrong_location]

    query = ReportQuery(
        technician_id="X",
        status=ReportStatus.REJECTED,
        location_id="L1",
        search="photo",
        start=date(2026, 3, 1),
        end=date(2026, 3, 15),
    )
    assert ids(apply_query(reports, query, now=NOW)) == [match.id]


def test_newest_first(report_factory):
    older = report_factory(date=NOW - timedelta(days=3))
    newer = report_factory(date=NOW)
    middle = report_factory(date=NOW - timedelta(days=1))
    assert ids(newest_first([older, newer, middle])) == [newer.id, middle.id, older.id]


def test_unique_unit_ids_sorted(report_factory):
    reports = [report_factory(unit_id=u) for u in ("UNIT-3", "UNIT-1", "UNIT-3", "UNIT-2")]
    assert unique_unit_ids(reports) == ["UNIT-1", "UNIT-2", "UNIT-3"]


def test_search_users(user_factory):
    admin = user_factory(UserRole.ADMIN, name="wh135", full_name="Admin User", email="wh135@whies.com")
    tech = user_factory(full_name="Hendra Abdi", badge_number="T001", email="hendra@whies.com")

    assert search_users([admin, tech], "hendra") == [tech]
    assert search_users([admin, tech], "t001") == [tech]
    assert search_users([admin, tech], "WH135") == [admin]
    assert search_users([admin, tech], "") == [admin, tech]


def test_search_locations(location_factory):
    hq = location_factory("Jakarta HQ", description="Main headquarters")
    plant = location_factory("Surabaya Plant")

    assert search_locations([hq, plant], "headquarters") == [hq]
    assert search_locations([hq, plant], "plant") == [plant]
