"""Use cases for listing users."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from classroom.domain.entities import User
from classroom.infrastructure.repositories import UserRepository

from .validators import ensure_valid_mode, ensure_valid_role


def list_users(
    session: Session,
    *,
    role: str | None = None,
    mode: str | None = None,
    is_approved: bool | None = None,
    skip: int = 0,
    limit: int | None = 100,
) -> Sequence[User]:
    """Return users, optionally filtered by role, attendance mode and approval."""

    return UserRepository(session).list(
        role=ensure_valid_role(role) if role is not None else None,
        mode=ensure_valid_mode(mode),
        is_approved=is_approved,
        skip=skip,
        limit=limit,
    )


def list_student_ids(session: Session) -> list[int]:
    """Ids of every approved student, used to address "all students"."""

    return UserRepository(session).list_student_ids()
