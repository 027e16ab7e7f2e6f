"""Use case for deleting groups."""

from sqlalchemy.orm import Session

from classroom.domain.errors import NotFoundError
from classroom.infrastructure.repositories import GroupRepository


def delete_group(session: Session, group_id: int) -> None:
    """Delete the group; its members simply lose the assignment."""

    repository = GroupRepository(session)
    if repository.get(group_id) is None:
        raise NotFoundError("Group not found")
    repository.delete(group_id)
