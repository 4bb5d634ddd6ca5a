# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from datetime import date

from records.base import RecordModel
from records.report import Report


class StatusCounts(RecordModel):
    """Number of reports in each status."""
    pending: int = 0
    completed: int = 0
    rejected: int = 0


class TechnicianCount(RecordModel):
    """Reports submitted by one technician."""
    technician_id: str
    name: str
    count: int


class UnitCount(RecordModel):
    """Reports filed against one unit."""
    unit_id: str
    count: int


class MonthlyCount(RecordModel):
    """Reports dated within one calendar month."""
    month: str
    month_start: date
    count: int


class AdminDashboard(RecordModel):
    """Overview across every report."""
    total_reports: int
    pending_count: int
    completed_count: int
    total_technicians: int
    total_locations: int

    status_breakdown: StatusCounts
    technicians: list[TechnicianCount]
    top_units: list[UnitCount]


class TechnicianDashboard(RecordModel):
    """Overview of the signed-in technician's own reports."""
    total_reports: int
    status_breakdown: StatusCounts
    monthly: list[MonthlyCount]
    recent_reports: list[Report]
