# api/dashboard/views.py
"""
Dashboard and aggregate statistics endpoints.
"""
from fastapi import APIRouter

from core.deps import AdminUser, Store
from records.user import UserRole
from .models import AdminDashboard
from .queries import count_by_status, count_by_technician, count_by_unit

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=AdminDashboard,
    summary="Get overview statistics",
)
async def get_dashboard_endpoint(admin: AdminUser, store: Store) -> AdminDashboard:
    """
    Overview across every report: totals, status breakdown, reports per
    technician and the five busiest units.
    """
    reports = store.reports
    breakdown = count_by_status(reports)
    return AdminDashboard(
        total_reports=len(reports),
        pending_count=breakdown.pending,
        completed_count=breakdown.completed,
        total_technicians=sum(1 for u in store.users if u.role == UserRole.TECHNICIAN),
        total_locations=len(store.locations),
        status_breakdown=breakdown,
        technicians=count_by_technician(reports),
        top_units=count_by_unit(reports),
    )
