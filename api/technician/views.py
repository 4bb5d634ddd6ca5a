# api/technician/views.py
"""
Technician endpoints.

Every read is scoped to the logged-in technician's own reports; another
technician's report is reported as not found.
"""
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from api.dashboard.models import TechnicianDashboard
from api.dashboard.queries import count_by_month, count_by_status
from api.export.formatter import format_report_summary
from api.reports.models import ReportListResponse
from api.reports.queries import ReportQuery, apply_query, by_technician, recent
from core.deps import Store, TechnicianUser
from core.exceptions import NotFoundError
from records.report import Report, ReportStatus, ReportSubmission
from records.user import User
from store import DomainStore

router = APIRouter(prefix="/technician", tags=["technician"])

RECENT_REPORTS = 5


def _own_report(store: DomainStore, technician: User, report_id: str) -> Report:
    try:
        report = store.get_report(report_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    if report.technician_id != technician.id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Report {report_id} not found",
        )
    return report


@router.get("/dashboard", response_model=TechnicianDashboard, summary="Technician dashboard")
async def get_dashboard(technician: TechnicianUser, store: Store) -> TechnicianDashboard:
    """Status breakdown, last six months and most recent reports of the technician."""
    reports = by_technician(store.reports, technician.id)
    return TechnicianDashboard(
        total_reports=len(reports),
        status_breakdown=count_by_status(reports),
        monthly=count_by_month(reports),
        recent_reports=recent(reports, RECENT_REPORTS),
    )


@router.get("/reports", response_model=ReportListResponse, summary="List my reports")
async def list_my_reports(
    technician: TechnicianUser,
    store: Store,
    status_filter: ReportStatus | None = Query(None, alias="status"),
    q: str | None = Query(None, description="Free-text search"),
) -> ReportListResponse:
    query = ReportQuery(technician_id=technician.id, status=status_filter, search=q)
    reports = apply_query(store.reports, query)
    return ReportListResponse(reports=reports, total=len(reports))


@router.post(
    "/reports",
    response_model=Report,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a report",
)
async def submit_report(
    submission: ReportSubmission,
    technician: TechnicianUser,
    store: Store,
) -> Report:
    """Submit a new report. It starts as pending."""
    try:
        return await store.submit_report(technician, submission)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


@router.get("/reports/{report_id}", response_model=Report, summary="Get one of my reports")
async def get_my_report(report_id: str, technician: TechnicianUser, store: Store) -> Report:
    return _own_report(store, technician, report_id)


@router.get(
    "/reports/{report_id}/summary",
    response_class=PlainTextResponse,
    summary="Download a report as text",
)
async def download_report_summary(
    report_id: str,
    technician: TechnicianUser,
    store: Store,
) -> PlainTextResponse:
    report = _own_report(store, technician, report_id)
    return PlainTextResponse(
        format_report_summary(report),
        headers={"Content-Disposition": f'attachment; filename="report_{report.id}.txt"'},
    )
