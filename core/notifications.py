"""
User-facing notifications emitted by store operations.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 100


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    """Keeps the most recent notifications, newest last."""

    def __init__(self, maxlen: int = MAX_NOTIFICATIONS):
        self._items: deque[Notification] = deque(maxlen=maxlen)

    def info(self, title: str, description: str) -> Notification:
        return self._push(Notification(title, description))

    def alert(self, title: str, description: str) -> Notification:
        return self._push(Notification(title, description, NotificationVariant.DESTRUCTIVE))

    def _push(self, notification: Notification) -> Notification:
        self._items.append(notification)
        logger.debug("notify [%s] %s: %s", notification.variant.value, notification.title, notification.description)
        return notification

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    @property
    def last(self) -> Notification | None:
        return self._items[-1] if self._items else None
