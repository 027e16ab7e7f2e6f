"""Domain entity representing a classroom user."""

from dataclasses import dataclass, field
from datetime import datetime

ROLE_SUPER_ADMIN = "super_admin"
ROLE_ADMIN = "admin"
ROLE_GROUP_ADMIN = "group_admin"
ROLE_STUDENT = "student"

USER_ROLES = (ROLE_SUPER_ADMIN, ROLE_ADMIN, ROLE_GROUP_ADMIN, ROLE_STUDENT)

MODE_ONLINE = "online"
MODE_OFFLINE = "offline"

USER_MODES = (MODE_ONLINE, MODE_OFFLINE)


@dataclass
class NotificationPreferences:
    """Email opt-ins for a user. Everything is enabled for new accounts."""

    email_notifications: bool = True
    announcement_emails: bool = True
    group_activity_emails: bool = True


@dataclass
class User:
    """Core attributes describing a platform user."""

    id: int | None
    name: str
    email: str
    password: str
    role: str
    mode: str | None = None
    is_approved: bool = False
    assigned_groups: set[int] = field(default_factory=set)
    notification_preferences: NotificationPreferences | None = None
    must_change_password: bool = False
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_role(self, *roles: str) -> bool:
        """Return ``True`` when the user's role is one of ``roles``."""

        return self.role.lower() in {role.lower() for role in roles}

    def is_admin(self) -> bool:
        """Return ``True`` for administrators and super administrators."""

        return self.has_role(ROLE_ADMIN, ROLE_SUPER_ADMIN)

    def wants_email_notifications(self) -> bool:
        """Missing preferences count as opted in."""

        if self.notification_preferences is None:
            return True
        return self.notification_preferences.email_notifications is not False


__all__ = [
    "MODE_OFFLINE",
    "MODE_ONLINE",
    "NotificationPreferences",
    "ROLE_ADMIN",
    "ROLE_GROUP_ADMIN",
    "ROLE_STUDENT",
    "ROLE_SUPER_ADMIN",
    "USER_MODES",
    "USER_ROLES",
    "User",
]
