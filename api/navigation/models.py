# api/navigation/models.py
from datetime import datetime

from records.base import RecordModel


class NavigationDecision(RecordModel):
    """Outcome of navigating to a path with the current session."""
    path: str
    outcome: str
    redirect_to: str | None = None


class NotificationRead(RecordModel):
    title: str
    description: str
    variant: str
    created_at: datetime
