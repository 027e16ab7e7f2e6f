"""Use case for editing group details."""

from dataclasses import replace

from sqlalchemy.orm import Session

from classroom.domain.entities import Group
from classroom.domain.errors import NotFoundError, ValidationError
from classroom.infrastructure.repositories import GroupRepository
from classroom.utils import now_in_app_timezone


def _optional_text(current: str | None, value: str | None) -> str | None:
    if value is None:
        return current
    return value.strip() or None


def update_group(
    session: Session,
    *,
    group_id: int,
    name: str | None = None,
    description: str | None = None,
    discord_link: str | None = None,
    hash13_link: str | None = None,
) -> Group:
    """Update the provided fields; an empty string clears an optional field."""

    repository = GroupRepository(session)
    group = repository.get(group_id)
    if group is None:
        raise NotFoundError("Group not found")

    new_name = group.name
    if name is not None:
        new_name = name.strip()
        if not new_name:
            raise ValidationError("Group name is required")

    updated = replace(
        group,
        name=new_name,
        description=_optional_text(group.description, description),
        discord_link=_optional_text(group.discord_link, discord_link),
        hash13_link=_optional_text(group.hash13_link, hash13_link),
        updated_at=now_in_app_timezone(),
    )
    return repository.update(updated)
