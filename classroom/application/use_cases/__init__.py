"""Aggregate application use cases."""

from .notifications import (
    get_all_notifications,
    get_notifications_for_user,
    mark_notification_as_read,
    send_notification,
)
from .users import authenticate_user, create_user, record_login

__all__ = [
    "authenticate_user",
    "create_user",
    "get_all_notifications",
    "get_notifications_for_user",
    "mark_notification_as_read",
    "record_login",
    "send_notification",
]
