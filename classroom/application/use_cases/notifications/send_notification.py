"""Use case for creating a notification and emailing its recipients."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from classroom.config import get_settings
from classroom.domain.entities import (
    NOTIFICATION_STATUS_SENT,
    BulkRecipients,
    GroupRecipients,
    IndividualRecipients,
    ModeRecipients,
    Notification,
    Recipients,
    recipients_from_dict,
)
from classroom.domain.errors import ValidationError
from classroom.infrastructure.email import EmailDispatcher
from classroom.infrastructure.email_templates import render_notification_email
from classroom.infrastructure.repositories import NotificationRepository

from .fanout import DeliveryResult, deliver_emails
from .resolution import resolve_email_addresses

logger = logging.getLogger(__name__)

_RECIPIENT_VARIANTS = (IndividualRecipients, GroupRecipients, ModeRecipients, BulkRecipients)


@dataclass
class NotificationSendResult:
    """The stored notification plus the outcome of every email attempt."""

    notification: Notification
    deliveries: list[DeliveryResult] = field(default_factory=list)

    @property
    def notification_id(self) -> int:
        return self.notification.id

    @property
    def delivered(self) -> list[str]:
        return [result.recipient for result in self.deliveries if result.delivered]

    @property
    def failed(self) -> list[str]:
        return [result.recipient for result in self.deliveries if not result.delivered]


def _coerce_recipients(recipients: Recipients | Mapping[str, Any]) -> Recipients:
    if isinstance(recipients, _RECIPIENT_VARIANTS):
        return recipients
    if isinstance(recipients, Mapping):
        return recipients_from_dict(recipients)
    raise ValidationError(f"Unsupported recipients: {recipients!r}")


def dispatch_notification(
    session: Session,
    *,
    title: str,
    content: str,
    created_by: int | None,
    recipients: Recipients | Mapping[str, Any],
    dispatcher: EmailDispatcher | None = None,
    email_timeout: float | None = None,
) -> NotificationSendResult:
    """Store the notification, then email whoever it resolves to.

    The record is committed before any recipient lookup or email attempt, so
    it survives directory failures (which still raise ``PersistenceError``)
    and is never rolled back because of email problems. Without a
    ``dispatcher`` no emails are sent.
    """

    descriptor = _coerce_recipients(recipients)
    notification = NotificationRepository(session).create(
        Notification(
            id=None,
            title=title or "",
            content=content or "",
            created_by=created_by,
            recipients=descriptor,
            status=NOTIFICATION_STATUS_SENT,
        )
    )
    logger.info(
        "Notification %s created by user %s for %s recipients",
        notification.id,
        created_by,
        descriptor.type,
    )

    addresses = resolve_email_addresses(session, descriptor)
    result = NotificationSendResult(notification=notification)
    if not addresses:
        return result
    if dispatcher is None:
        logger.info(
            "Email delivery disabled; notification %s not emailed to %d address(es)",
            notification.id,
            len(addresses),
        )
        return result

    subject, html, text = render_notification_email(notification.title, notification.content)
    timeout = email_timeout if email_timeout is not None else get_settings().email_timeout_seconds
    result.deliveries = deliver_emails(
        dispatcher, addresses, subject=subject, html=html, text=text, timeout=timeout
    )
    if result.failed:
        logger.warning(
            "Notification %s: %d of %d email(s) could not be delivered",
            notification.id,
            len(result.failed),
            len(result.deliveries),
        )
    return result


def send_notification(
    session: Session,
    *,
    title: str,
    content: str,
    created_by: int | None,
    recipients: Recipients | Mapping[str, Any],
    dispatcher: EmailDispatcher | None = None,
    email_timeout: float | None = None,
) -> int:
    """Create and fan out a notification, returning its id."""

    return dispatch_notification(
        session,
        title=title,
        content=content,
        created_by=created_by,
        recipients=recipients,
        dispatcher=dispatcher,
        email_timeout=email_timeout,
    ).notification_id


__all__ = ["NotificationSendResult", "dispatch_notification", "send_notification"]
