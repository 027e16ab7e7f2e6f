"""Use cases for managing groups and their membership."""

from .create_group import create_group
from .delete_group import delete_group
from .list_groups import get_group, list_group_member_ids, list_groups
from .membership import (
    assign_user_to_group,
    assign_user_to_groups,
    remove_user_from_group,
)
from .update_group import update_group

__all__ = [
    "assign_user_to_group",
    "assign_user_to_groups",
    "create_group",
    "delete_group",
    "get_group",
    "list_group_member_ids",
    "list_groups",
    "remove_user_from_group",
    "update_group",
]
