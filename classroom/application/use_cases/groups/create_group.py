"""Use case for creating groups."""

from sqlalchemy.orm import Session

from classroom.domain.entities import Group
from classroom.domain.errors import ValidationError
from classroom.infrastructure.repositories import GroupRepository
from classroom.utils import now_in_app_timezone


def create_group(
    session: Session,
    *,
    name: str,
    created_by: int | None,
    description: str | None = None,
    discord_link: str | None = None,
    hash13_link: str | None = None,
) -> Group:
    """Create an empty group."""

    normalized_name = (name or "").strip()
    if not normalized_name:
        raise ValidationError("Group name is required")

    group = Group(
        id=None,
        name=normalized_name,
        description=(description or "").strip() or None,
        created_by=created_by,
        discord_link=discord_link,
        hash13_link=hash13_link,
        created_at=now_in_app_timezone(),
    )
    return GroupRepository(session).create(group)
