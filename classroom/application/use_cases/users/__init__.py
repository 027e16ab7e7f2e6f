"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .bulk_create_users import (
    BulkCreateError,
    BulkCreateResult,
    BulkCreatedUser,
    BulkUserEntry,
    bulk_create_users,
)
from .create_user import create_user
from .delete_user import delete_user
from .get_user import get_user
from .list_users import list_student_ids, list_users
from .permissions import (
    can_approve_users,
    can_assign_role,
    can_create_announcements,
    can_manage_groups,
    can_manage_users,
    can_view_all_users,
)
from .record_login import record_login
from .update_user import (
    approve_user,
    change_password,
    reset_user_password,
    update_notification_preferences,
    update_user_mode,
    update_user_role,
)

__all__ = [
    "AuthenticationStatus",
    "BulkCreateError",
    "BulkCreateResult",
    "BulkCreatedUser",
    "BulkUserEntry",
    "approve_user",
    "authenticate_user",
    "bulk_create_users",
    "can_approve_users",
    "can_assign_role",
    "can_create_announcements",
    "can_manage_groups",
    "can_manage_users",
    "can_view_all_users",
    "change_password",
    "create_user",
    "delete_user",
    "get_user",
    "list_student_ids",
    "list_users",
    "record_login",
    "reset_user_password",
    "update_notification_preferences",
    "update_user_mode",
    "update_user_role",
]
