# api/reports/queries.py
"""
Pure query functions over the report collection.

Filters compose by sequential application (logical AND) and results are
sorted newest first. Nothing is cached; relative periods read the wall
clock on every call.
"""
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum

from records.location import Location
from records.report import Report, ReportStatus
from records.user import User

ALL = "all"


class TimePeriod(str, Enum):
    TODAY = "today"
    LAST_7_DAYS = "last_7_days"
    LAST_30_DAYS = "last_30_days"


PERIOD_DAYS = {
    TimePeriod.TODAY: 1,
    TimePeriod.LAST_7_DAYS: 7,
    TimePeriod.LAST_30_DAYS: 30,
}


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def by_status(reports: Iterable[Report], status: ReportStatus | str | None) -> list[Report]:
    """Exact status match; None or "all" passes everything through."""
    if status is None or status == ALL:
        return list(reports)
    status = ReportStatus(status)
    return [r for r in reports if r.status == status]


def by_technician(reports: Iterable[Report], technician_id: str | None) -> list[Report]:
    """Restrict to one technician's reports."""
    if technician_id is None:
        return list(reports)
    return [r for r in reports if r.technician_id == technician_id]


def by_location(reports: Iterable[Report], location_id: str | None) -> list[Report]:
    if location_id is None:
        return list(reports)
    return [r for r in reports if r.location_id == location_id]


def by_unit(reports: Iterable[Report], unit_id: str | None) -> list[Report]:
    if unit_id is None or unit_id == ALL:
        return list(reports)
    return [r for r in reports if r.unit_id == unit_id]


def _search_fields(report: Report) -> tuple[str, ...]:
    return (
        report.technician_name,
        report.badge_number,
        report.unit_id,
        report.location_name,
        report.device_id,
        report.card_number,
        report.description or "",
        report.notes or "",
    )


def search(reports: Iterable[Report], term: str | None) -> list[Report]:
    """Case-insensitive substring match on any searchable field."""
    term = (term or "").strip().lower()
    if not term:
        return list(reports)
    return [
        r for r in reports
        if any(term in value.lower() for value in _search_fields(r))
    ]


def by_date_range(
    reports: Iterable[Report],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> list[Report]:
    """
    Inclusive range at day granularity.

    A plain date is widened to its whole day (start-of-day / end-of-day).
    A datetime bound is compared as-is, inclusively.
    """
    lower = _lower_bound(start)
    upper = _upper_bound(end)
    result = []
    for report in reports:
        when = as_utc(report.date)
        if lower is not None and when < lower:
            continue
        if upper is not None and when > upper:
            continue
        result.append(report)
    return result


def _lower_bound(value: date | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    return start_of_day(value)


def _upper_bound(value: date | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    return end_of_day(value)


def period_bounds(period: TimePeriod | str, now: datetime | None = None) -> tuple[datetime, datetime]:
    """
    Bounds of a relative period, from the start of the first day to the
    end of today.
    """
    period = TimePeriod(period)
    today = as_utc(now or datetime.now(timezone.utc)).date()
    first_day = today - timedelta(days=PERIOD_DAYS[period] - 1)
    return start_of_day(first_day), end_of_day(today)


def by_period(
    reports: Iterable[Report],
    period: TimePeriod | str | None,
    now: datetime | None = None,
) -> list[Report]:
    if period is None or period == ALL:
        return list(reports)
    lower, upper = period_bounds(period, now)
    return by_date_range(reports, lower, upper)


def newest_first(reports: Iterable[Report]) -> list[Report]:
    return sorted(reports, key=lambda r: as_utc(r.date), reverse=True)


@dataclass(frozen=True)
class ReportQuery:
    """All optional report filters; unset ones pass everything through."""
    status: ReportStatus | None = None
    technician_id: str | None = None
    search: str | None = None
    start: date | datetime | None = None
    end: date | datetime | None = None
    period: TimePeriod | None = None
    location_id: str | None = None
    unit_id: str | None = None


def apply_query(reports: Iterable[Report], query: ReportQuery, now: datetime | None = None) -> list[Report]:
    """Apply every active filter of `query`, then sort newest first."""
    result = by_technician(reports, query.technician_id)
    result = by_status(result, query.status)
    result = by_location(result, query.location_id)
    result = by_unit(result, query.unit_id)
    result = by_date_range(result, query.start, query.end)
    result = by_period(result, query.period, now)
    result = search(result, query.search)
    return newest_first(result)


def unique_unit_ids(reports: Iterable[Report]) -> list[str]:
    """Sorted distinct unit ids, for export selection."""
    return sorted({r.unit_id for r in reports})


def recent(reports: Iterable[Report], limit: int = 5) -> list[Report]:
    return newest_first(reports)[:limit]


def search_users(users: Sequence[User], term: str | None) -> list[User]:
    """Case-insensitive match on login name, full name, email and badge number."""
    term = (term or "").strip().lower()
    if not term:
        return list(users)
    return [
        u for u in users
        if any(term in value.lower() for value in (u.name, u.full_name, u.email, u.badge_number))
    ]


def search_locations(locations: Sequence[Location], term: str | None) -> list[Location]:
    """Case-insensitive match on name and description."""
    term = (term or "").strip().lower()
    if not term:
        return list(locations)
    return [
        loc for loc in locations
        if term in loc.name.lower() or term in (loc.description or "").lower()
    ]
