"""Repository implementations for infrastructure layer."""

from .group_repository import GroupRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "GroupRepository",
    "NotificationRepository",
    "UserRepository",
]
