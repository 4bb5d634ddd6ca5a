# api/dashboard/queries.py
"""
Aggregations over the report collection for the dashboards.
"""
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timezone

from api.reports.queries import by_date_range, end_of_day, start_of_day
from records.report import Report, ReportStatus
from .models import MonthlyCount, StatusCounts, TechnicianCount, UnitCount

TOP_UNITS = 5
TRAILING_MONTHS = 6


def count_by_status(reports: Iterable[Report]) -> StatusCounts:
    """Count reports per status, zero for statuses with none."""
    counts = Counter(r.status for r in reports)
    return StatusCounts(
        pending=counts[ReportStatus.PENDING],
        completed=counts[ReportStatus.COMPLETED],
        rejected=counts[ReportStatus.REJECTED],
    )


def count_by_technician(reports: Iterable[Report]) -> list[TechnicianCount]:
    """
    Count reports per technician, most reports first.

    The display name is the snapshot on the last report seen for each
    technician.
    """
    counts: Counter[str] = Counter()
    names: dict[str, str] = {}
    for report in reports:
        counts[report.technician_id] += 1
        names[report.technician_id] = report.technician_name
    return [
        TechnicianCount(technician_id=tech_id, name=names[tech_id], count=count)
        for tech_id, count in counts.most_common()
    ]


def count_by_unit(reports: Iterable[Report], limit: int = TOP_UNITS) -> list[UnitCount]:
    """Count reports per unit id, most reports first, truncated to `limit`."""
    counts = Counter(r.unit_id for r in reports)
    return [UnitCount(unit_id=unit_id, count=count) for unit_id, count in counts.most_common(limit)]


def _month_starts(today: date, months: int) -> list[date]:
    """First day of each of the trailing `months` months, oldest first, current month last."""
    starts = []
    year, month = today.year, today.month
    for _ in range(months):
        starts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


def _next_month(start: date) -> date:
    if start.month == 12:
        return date(start.year + 1, 1, 1)
    return date(start.year, start.month + 1, 1)


def count_by_month(
    reports: Sequence[Report],
    now: datetime | None = None,
    months: int = TRAILING_MONTHS,
) -> list[MonthlyCount]:
    """
    Count reports per calendar month for the trailing `months` months,
    including months without reports.
    """
    today = (now or datetime.now(timezone.utc)).astimezone(timezone.utc).date()
    result = []
    for start in _month_starts(today, months):
        last_day = date.fromordinal(_next_month(start).toordinal() - 1)
        in_month = by_date_range(reports, start_of_day(start), end_of_day(last_day))
        result.append(MonthlyCount(
            month=start.strftime("%b"),
            month_start=start,
            count=len(in_month),
        ))
    return result
