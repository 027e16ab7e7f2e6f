"""Use case for deleting a user."""

from sqlalchemy.orm import Session

from classroom.domain.errors import NotFoundError
from classroom.infrastructure.repositories import UserRepository


def delete_user(session: Session, user_id: int) -> None:
    """Delete the specified user and its group memberships."""

    repository = UserRepository(session)
    if repository.get(user_id) is None:
        raise NotFoundError("User not found")
    repository.delete(user_id)
