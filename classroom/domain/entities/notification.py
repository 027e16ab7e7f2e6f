"""Domain entity representing a notification sent to classroom users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .recipients import Recipients

NOTIFICATION_STATUS_SENT = "sent"
NOTIFICATION_STATUS_DELIVERED = "delivered"
NOTIFICATION_STATUS_READ = "read"

NOTIFICATION_STATUSES = (
    NOTIFICATION_STATUS_SENT,
    NOTIFICATION_STATUS_DELIVERED,
    NOTIFICATION_STATUS_READ,
)


@dataclass
class Notification:
    """Message addressed to the users described by ``recipients``.

    Only ``status`` and ``read_by`` change after creation. ``read_by`` is a
    set: marking the same reader twice leaves a single entry.
    """

    id: int | None
    title: str
    content: str
    created_by: int | None
    recipients: Recipients
    status: str = NOTIFICATION_STATUS_SENT
    read_by: set[int] = field(default_factory=set)
    created_at: datetime | None = None

    def is_read_by(self, user_id: int) -> bool:
        return user_id in self.read_by


__all__ = [
    "NOTIFICATION_STATUSES",
    "NOTIFICATION_STATUS_DELIVERED",
    "NOTIFICATION_STATUS_READ",
    "NOTIFICATION_STATUS_SENT",
    "Notification",
]
