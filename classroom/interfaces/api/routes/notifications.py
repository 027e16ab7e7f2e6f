"""Endpoints for sending notifications and reading the notification feed."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from classroom.application.use_cases.notifications import (
    dispatch_notification,
    get_all_notifications,
    get_notifications_for_user,
    mark_notification_as_read,
)
from classroom.application.use_cases.users import list_student_ids
from classroom.domain.entities import (
    IndividualRecipients,
    Notification,
    Recipients,
    User,
    recipients_from_dict,
    recipients_to_dict,
)
from classroom.domain.errors import NotFoundError, PersistenceError, ValidationError
from classroom.infrastructure.database import get_db
from classroom.infrastructure.email import EmailDispatcher
from classroom.infrastructure.repositories import NotificationRepository
from classroom.interfaces.api.dependencies import (
    get_current_active_user,
    get_email_dispatcher,
    require_admin,
    require_announcer,
)
from classroom.interfaces.api.routes_helpers import http_error_from
from classroom.interfaces.api.schemas import (
    NotificationCreate,
    NotificationRead,
    NotificationSendResponse,
)
from classroom.interfaces.api.schemas.notification import AllStudentsRecipientsIn

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(
    notification: Notification, *, viewer_id: int | None = None
) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        title=notification.title,
        content=notification.content,
        created_by=notification.created_by,
        created_at=notification.created_at,
        recipients=recipients_to_dict(notification.recipients),
        status=notification.status,
        read_by=sorted(notification.read_by),
        is_read=notification.is_read_by(viewer_id) if viewer_id is not None else None,
    )


def _resolve_descriptor(db: Session, payload: NotificationCreate) -> Recipients:
    if isinstance(payload.recipients, AllStudentsRecipientsIn):
        student_ids = list_student_ids(db)
        if not student_ids:
            raise ValidationError("There are no approved students to notify")
        return IndividualRecipients(user_ids=student_ids)
    return recipients_from_dict(payload.recipients.model_dump(mode="json"))


@router.post(
    "/",
    response_model=NotificationSendResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    dispatcher: EmailDispatcher | None = Depends(get_email_dispatcher),
    current_user: User = Depends(require_announcer),
) -> NotificationSendResponse:
    """Store a notification and email every recipient who accepts emails.

    ``{"type": "all"}`` is shorthand for the ids of every approved student.
    Email failures are reported in the response, never as an error status.
    """

    try:
        descriptor = _resolve_descriptor(db, payload)
        result = dispatch_notification(
            db,
            title=payload.title,
            content=payload.content,
            created_by=current_user.id,
            recipients=descriptor,
            dispatcher=dispatcher,
        )
    except (ValueError, PersistenceError) as exc:
        raise http_error_from(exc) from exc

    return NotificationSendResponse(
        notification=_notification_to_schema(result.notification, viewer_id=current_user.id),
        emails_delivered=result.delivered,
        emails_failed=result.failed,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the notifications addressed to the authenticated user, newest first."""

    try:
        notifications = get_notifications_for_user(db, current_user.id)
    except PersistenceError as exc:
        raise http_error_from(exc) from exc
    return [
        _notification_to_schema(notification, viewer_id=current_user.id)
        for notification in notifications
    ]


@router.get("/all", response_model=list[NotificationRead])
def list_all_notifications(
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[NotificationRead]:
    """Return the complete notification history."""

    try:
        notifications = get_all_notifications(db, limit=limit)
    except PersistenceError as exc:
        raise http_error_from(exc) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Record that the caller read the notification. Repeating is harmless."""

    try:
        notification = NotificationRepository(db).get(notification_id)
        if notification is None or not (
            notification.recipients.matches(current_user) or current_user.is_admin()
        ):
            raise NotFoundError("Notification not found")
        notification = mark_notification_as_read(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return _notification_to_schema(notification, viewer_id=current_user.id)


__all__ = ["router"]
