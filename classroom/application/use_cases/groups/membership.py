"""Use cases for assigning users to groups."""

from collections.abc import Iterable
from dataclasses import replace

from sqlalchemy.orm import Session

from classroom.domain.entities import User
from classroom.domain.errors import NotFoundError
from classroom.infrastructure.repositories import GroupRepository, UserRepository


def _ensure_exists(session: Session, *, group_id: int, user_id: int) -> None:
    if GroupRepository(session).get(group_id) is None:
        raise NotFoundError("Group not found")
    if UserRepository(session).get(user_id) is None:
        raise NotFoundError("User not found")


def assign_user_to_group(session: Session, *, group_id: int, user_id: int) -> User:
    """Add ``group_id`` to the user's assigned groups. Repeating is a no-op."""

    _ensure_exists(session, group_id=group_id, user_id=user_id)
    GroupRepository(session).add_member(group_id, user_id)
    return UserRepository(session).get(user_id)


def remove_user_from_group(session: Session, *, group_id: int, user_id: int) -> User:
    """Drop ``group_id`` from the user's assigned groups."""

    _ensure_exists(session, group_id=group_id, user_id=user_id)
    GroupRepository(session).remove_member(group_id, user_id)
    return UserRepository(session).get(user_id)


def assign_user_to_groups(
    session: Session, *, user_id: int, group_ids: Iterable[int]
) -> User:
    """Add several groups at once, keeping the existing assignments."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    wanted = user.assigned_groups | {int(group_id) for group_id in group_ids}
    if wanted == user.assigned_groups:
        return user
    return repository.update(replace(user, assigned_groups=wanted))
