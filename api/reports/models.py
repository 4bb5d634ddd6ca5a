# api/reports/models.py
"""
Pydantic models for report endpoints.
"""
from records.base import RecordModel
from records.report import Report, ReportStatus


class StatusUpdate(RecordModel):
    """Request to move a report to a new status."""
    status: ReportStatus


class ReportListResponse(RecordModel):
    reports: list[Report]
    total: int
