# api/export/views.py
"""
Export endpoints. Admin only.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Query
from fastapi.responses import Response

from api.reports.queries import ReportQuery, apply_query, unique_unit_ids
from core.deps import AdminUser, Store
from .formatter import CSV_MEDIA_TYPE, export_filename, format_reports_csv

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/units", response_model=list[str], summary="List unit IDs available for export")
async def list_units(admin: AdminUser, store: Store) -> list[str]:
    return unique_unit_ids(store.reports)


@router.get("/reports.csv", summary="Download reports as CSV")
async def export_reports(
    admin: AdminUser,
    store: Store,
    unit_id: str | None = Query(None, alias="unitId", description="Only this unit; omit or 'all' for every unit"),
) -> Response:
    """
    Export reports, newest first, optionally restricted to one unit.
    """
    reports = apply_query(store.reports, ReportQuery(unit_id=unit_id))
    filename = export_filename(datetime.now(timezone.utc).date())
    return Response(
        content=format_reports_csv(reports),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
