"""ORM models used by the application infrastructure."""

from .group import GroupModel, group_membership_table
from .notification import NotificationModel, NotificationReadModel
from .user import UserModel

__all__ = [
    "GroupModel",
    "NotificationModel",
    "NotificationReadModel",
    "UserModel",
    "group_membership_table",
]
