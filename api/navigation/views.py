# api/navigation/views.py
"""
Route resolution and the notification feed.
"""
from fastapi import APIRouter, Query

from core.deps import CurrentUser, Store
from core.guards import RedirectTo
from core.routes import NotFound, resolve_route
from .models import NavigationDecision, NotificationRead

router = APIRouter(tags=["navigation"])


@router.get("/navigation", response_model=NavigationDecision, summary="Resolve a dashboard path")
async def resolve_navigation(
    store: Store,
    path: str = Query(..., description="Dashboard path, e.g. /users"),
) -> NavigationDecision:
    """
    Tell the client whether the session may open `path`, or where to go instead.
    """
    decision = resolve_route(path, store.current_user)
    if isinstance(decision, RedirectTo):
        return NavigationDecision(path=path, outcome="redirect", redirect_to=decision.route)
    if isinstance(decision, NotFound):
        return NavigationDecision(path=path, outcome="not_found")
    return NavigationDecision(path=path, outcome="allow")


@router.get("/notifications", response_model=list[NotificationRead], summary="Recent notifications")
async def list_notifications(current_user: CurrentUser, store: Store) -> list[NotificationRead]:
    """Most recent notifications, newest first."""
    return [
        NotificationRead(
            title=n.title,
            description=n.description,
            variant=n.variant.value,
            created_at=n.created_at,
        )
        for n in reversed(store.notifications)
    ]
