"""Use cases for reading notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from classroom.domain.entities import Notification
from classroom.infrastructure.repositories import NotificationRepository, UserRepository


def get_notifications_for_user(session: Session, user_id: int) -> list[Notification]:
    """Return the notifications addressed to ``user_id``, newest first.

    Group membership and mode are evaluated against the user's current record,
    not a snapshot taken at send time: joining a group reveals its earlier
    notifications and leaving it hides them. Unknown users get an empty list.
    """

    user = UserRepository(session).get(user_id)
    if user is None:
        return []
    notifications = NotificationRepository(session).list_all()
    return [notification for notification in notifications if notification.recipients.matches(user)]


def get_all_notifications(session: Session, *, limit: int | None = None) -> list[Notification]:
    """Return the full notification history for administrators, newest first."""

    return list(NotificationRepository(session).list_all(limit=limit))


__all__ = ["get_all_notifications", "get_notifications_for_user"]
