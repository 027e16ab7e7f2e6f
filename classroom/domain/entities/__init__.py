"""Domain entities exposed by the application."""

from .group import Group
from .notification import (
    NOTIFICATION_STATUSES,
    NOTIFICATION_STATUS_DELIVERED,
    NOTIFICATION_STATUS_READ,
    NOTIFICATION_STATUS_SENT,
    Notification,
)
from .recipients import (
    RECIPIENTS_BULK,
    RECIPIENTS_GROUP,
    RECIPIENTS_INDIVIDUAL,
    RECIPIENTS_MODE,
    BulkRecipients,
    GroupRecipients,
    IndividualRecipients,
    ModeRecipients,
    Recipients,
    recipients_from_dict,
    recipients_to_dict,
)
from .user import (
    MODE_OFFLINE,
    MODE_ONLINE,
    ROLE_ADMIN,
    ROLE_GROUP_ADMIN,
    ROLE_STUDENT,
    ROLE_SUPER_ADMIN,
    USER_MODES,
    USER_ROLES,
    NotificationPreferences,
    User,
)

__all__ = [
    "BulkRecipients",
    "Group",
    "GroupRecipients",
    "IndividualRecipients",
    "MODE_OFFLINE",
    "MODE_ONLINE",
    "ModeRecipients",
    "NOTIFICATION_STATUSES",
    "NOTIFICATION_STATUS_DELIVERED",
    "NOTIFICATION_STATUS_READ",
    "NOTIFICATION_STATUS_SENT",
    "Notification",
    "NotificationPreferences",
    "RECIPIENTS_BULK",
    "RECIPIENTS_GROUP",
    "RECIPIENTS_INDIVIDUAL",
    "RECIPIENTS_MODE",
    "ROLE_ADMIN",
    "ROLE_GROUP_ADMIN",
    "ROLE_STUDENT",
    "ROLE_SUPER_ADMIN",
    "Recipients",
    "USER_MODES",
    "USER_ROLES",
    "User",
    "recipients_from_dict",
    "recipients_to_dict",
]
