"""Use cases for reading groups."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from classroom.domain.entities import Group
from classroom.domain.errors import NotFoundError
from classroom.infrastructure.repositories import GroupRepository


def list_groups(session: Session) -> Sequence[Group]:
    """Return every group with its member count."""

    return GroupRepository(session).list()


def get_group(session: Session, group_id: int) -> Group:
    group = GroupRepository(session).get(group_id)
    if group is None:
        raise NotFoundError("Group not found")
    return group


def list_group_member_ids(session: Session, group_id: int) -> list[int]:
    """Ids of the users whose assigned groups include ``group_id``."""

    repository = GroupRepository(session)
    if repository.get(group_id) is None:
        raise NotFoundError("Group not found")
    return repository.list_member_ids(group_id)
