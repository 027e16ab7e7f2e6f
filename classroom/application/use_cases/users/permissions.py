"""Role-based permission rules for classroom administration."""

from classroom.domain.entities import (
    ROLE_ADMIN,
    ROLE_GROUP_ADMIN,
    ROLE_STUDENT,
    ROLE_SUPER_ADMIN,
)

_ADMIN_ROLES = frozenset({ROLE_SUPER_ADMIN, ROLE_ADMIN})
_ANNOUNCER_ROLES = frozenset({ROLE_SUPER_ADMIN, ROLE_ADMIN, ROLE_GROUP_ADMIN})
_ADMIN_ASSIGNABLE_ROLES = frozenset({ROLE_STUDENT, ROLE_GROUP_ADMIN})


def can_manage_users(role: str) -> bool:
    return role in _ADMIN_ROLES


def can_manage_groups(role: str) -> bool:
    return role in _ADMIN_ROLES


def can_create_announcements(role: str) -> bool:
    """Announcements and notifications share the same audience of senders."""

    return role in _ANNOUNCER_ROLES


def can_view_all_users(role: str) -> bool:
    return role in _ADMIN_ROLES


def can_approve_users(role: str) -> bool:
    return role in _ADMIN_ROLES


def can_assign_role(role: str, target_role: str) -> bool:
    """Super admins assign anything; admins only students and group admins."""

    if role == ROLE_SUPER_ADMIN:
        return True
    if role == ROLE_ADMIN:
        return target_role in _ADMIN_ASSIGNABLE_ROLES
    return False


__all__ = [
    "can_approve_users",
    "can_assign_role",
    "can_create_announcements",
    "can_manage_groups",
    "can_manage_users",
    "can_view_all_users",
]
