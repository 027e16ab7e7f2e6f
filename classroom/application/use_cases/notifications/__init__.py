"""Use cases for sending and reading notifications."""

from .fanout import DeliveryResult, deliver_emails
from .list_notifications import get_all_notifications, get_notifications_for_user
from .mark_as_read import mark_notification_as_read
from .resolution import resolve_email_addresses, resolve_recipient_user_ids
from .send_notification import (
    NotificationSendResult,
    dispatch_notification,
    send_notification,
)

__all__ = [
    "DeliveryResult",
    "NotificationSendResult",
    "deliver_emails",
    "dispatch_notification",
    "get_all_notifications",
    "get_notifications_for_user",
    "mark_notification_as_read",
    "resolve_email_addresses",
    "resolve_recipient_user_ids",
    "send_notification",
]
