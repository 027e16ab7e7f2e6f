from .auth import PasswordChangeRequest, Token
from .group import GroupCreate, GroupRead, GroupUpdate
from .notification import (
    NotificationCreate,
    NotificationRead,
    NotificationSendResponse,
    RecipientsIn,
)
from .user import (
    BulkUserCreate,
    BulkUserCreateResponse,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    UserCreate,
    UserModeUpdate,
    UserRead,
    UserRoleUpdate,
)

__all__ = [
    "BulkUserCreate",
    "BulkUserCreateResponse",
    "GroupCreate",
    "GroupRead",
    "GroupUpdate",
    "NotificationCreate",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "NotificationSendResponse",
    "PasswordChangeRequest",
    "RecipientsIn",
    "Token",
    "UserCreate",
    "UserModeUpdate",
    "UserRead",
    "UserRoleUpdate",
]
