"""Use case for creating users."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from classroom.domain.entities import MODE_ONLINE, NotificationPreferences, User
from classroom.infrastructure.repositories import UserRepository
from classroom.infrastructure.security import get_password_hash
from classroom.utils import now_in_app_timezone

from .validators import ensure_valid_mode, ensure_valid_role, normalize_email


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    mode: str | None = MODE_ONLINE,
    is_approved: bool = False,
    must_change_password: bool = False,
    group_ids: Iterable[int] = (),
) -> User:
    """Create a new user ensuring unique email addresses.

    New accounts start with every notification preference enabled.
    """

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    if repository.get_by_email(normalized_email):
        raise ValueError("Email address is already registered")

    user = User(
        id=None,
        name=name.strip(),
        email=normalized_email,
        password=get_password_hash(password),
        role=ensure_valid_role(role),
        mode=ensure_valid_mode(mode),
        is_approved=is_approved,
        assigned_groups={int(group_id) for group_id in group_ids},
        notification_preferences=NotificationPreferences(),
        must_change_password=must_change_password,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
