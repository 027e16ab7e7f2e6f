"""Use case for recording that a user read a notification."""

from sqlalchemy.orm import Session

from classroom.domain.entities import Notification
from classroom.infrastructure.repositories import NotificationRepository


def mark_notification_as_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    """Add ``user_id`` to the readers of the notification. Safe to repeat."""

    return NotificationRepository(session).add_reader(notification_id, user_id)


__all__ = ["mark_notification_as_read"]
