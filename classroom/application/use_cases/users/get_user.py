"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from classroom.domain.entities import User
from classroom.domain.errors import NotFoundError
from classroom.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the requested user or raise :class:`NotFoundError`."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
