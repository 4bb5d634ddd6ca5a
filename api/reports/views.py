# api/reports/views.py
"""
Report review endpoints. Admin only.
"""
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from api.auth.models import MessageResponse
from core.deps import AdminUser, Store
from core.exceptions import NotFoundError
from records.report import Report, ReportStatus, ReportUpdate
from .models import ReportListResponse, StatusUpdate
from .queries import ReportQuery, TimePeriod, apply_query

router = APIRouter(prefix="/reports", tags=["reports"])


def _not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc),
    )


@router.get("", response_model=ReportListResponse, summary="List reports")
async def list_reports(
    admin: AdminUser,
    store: Store,
    status_filter: ReportStatus | None = Query(None, alias="status"),
    q: str | None = Query(None, description="Free-text search"),
    technician_id: str | None = Query(None, alias="technicianId"),
    location_id: str | None = Query(None, alias="locationId"),
    unit_id: str | None = Query(None, alias="unitId"),
    start: date | None = Query(None, description="First day, inclusive"),
    end: date | None = Query(None, description="Last day, inclusive"),
    period: TimePeriod | None = Query(None),
) -> ReportListResponse:
    """
    List reports matching every given filter, newest first.
    """
    query = ReportQuery(
        status=status_filter,
        technician_id=technician_id,
        search=q,
        start=start,
        end=end,
        period=period,
        location_id=location_id,
        unit_id=unit_id,
    )
    reports = apply_query(store.reports, query)
    return ReportListResponse(reports=reports, total=len(reports))


@router.get("/{report_id}", response_model=Report, summary="Get report by ID")
async def get_report(report_id: str, admin: AdminUser, store: Store) -> Report:
    try:
        return store.get_report(report_id)
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.put("/{report_id}", response_model=Report, summary="Update report")
async def update_report(
    report_id: str,
    updates: ReportUpdate,
    admin: AdminUser,
    store: Store,
) -> Report:
    try:
        return await store.update_report(report_id, updates)
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.patch("/{report_id}/status", response_model=Report, summary="Change report status")
async def update_report_status(
    report_id: str,
    payload: StatusUpdate,
    admin: AdminUser,
    store: Store,
) -> Report:
    """Mark a report pending, completed or rejected."""
    try:
        return await store.update_report_status(report_id, payload.status)
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.delete("/{report_id}", response_model=MessageResponse, summary="Delete report")
async def delete_report(report_id: str, admin: AdminUser, store: Store) -> MessageResponse:
    try:
        deleted = await store.delete_report(report_id)
    except NotFoundError as exc:
        raise _not_found(exc) from exc

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        )
    return MessageResponse(message="Report deleted successfully")
