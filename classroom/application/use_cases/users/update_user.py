"""Use cases for updating user records."""

from dataclasses import replace

from sqlalchemy.orm import Session

from classroom.domain.entities import NotificationPreferences, User
from classroom.domain.errors import NotFoundError
from classroom.infrastructure.repositories import UserRepository
from classroom.infrastructure.security import generate_secure_password, get_password_hash
from classroom.utils import now_in_app_timezone

from .permissions import can_assign_role
from .validators import ensure_valid_mode, ensure_valid_role


def _load(repository: UserRepository, user_id: int) -> User:
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def approve_user(session: Session, *, user_id: int) -> User:
    """Allow the user to sign in."""

    repository = UserRepository(session)
    user = _load(repository, user_id)
    if user.is_approved:
        return user
    return repository.update(replace(user, is_approved=True, updated_at=now_in_app_timezone()))


def update_user_role(session: Session, *, user_id: int, role: str, actor: User) -> User:
    """Change the role of ``user_id`` if ``actor`` may grant it."""

    new_role = ensure_valid_role(role)
    if not can_assign_role(actor.role, new_role):
        raise PermissionError(f"Role '{actor.role}' cannot assign role '{new_role}'")

    repository = UserRepository(session)
    user = _load(repository, user_id)
    if not can_assign_role(actor.role, user.role):
        raise PermissionError(f"Role '{actor.role}' cannot manage a '{user.role}' account")
    if user.role == new_role:
        return user
    return repository.update(replace(user, role=new_role, updated_at=now_in_app_timezone()))


def update_user_mode(session: Session, *, user_id: int, mode: str | None) -> User:
    """Switch the user between online and offline attendance."""

    repository = UserRepository(session)
    user = _load(repository, user_id)
    return repository.update(
        replace(user, mode=ensure_valid_mode(mode), updated_at=now_in_app_timezone())
    )


def update_notification_preferences(
    session: Session,
    *,
    user_id: int,
    email_notifications: bool | None = None,
    announcement_emails: bool | None = None,
    group_activity_emails: bool | None = None,
) -> User:
    """Update the provided preference flags, keeping the others unchanged."""

    repository = UserRepository(session)
    user = _load(repository, user_id)
    current = user.notification_preferences or NotificationPreferences()
    preferences = replace(
        current,
        email_notifications=(
            current.email_notifications if email_notifications is None else email_notifications
        ),
        announcement_emails=(
            current.announcement_emails if announcement_emails is None else announcement_emails
        ),
        group_activity_emails=(
            current.group_activity_emails
            if group_activity_emails is None
            else group_activity_emails
        ),
    )
    return repository.update(
        replace(user, notification_preferences=preferences, updated_at=now_in_app_timezone())
    )


def change_password(session: Session, *, user_id: int, password: str) -> User:
    """Store a password chosen by the user and clear the forced-change flag."""

    repository = UserRepository(session)
    user = _load(repository, user_id)
    return repository.update(
        replace(
            user,
            password=get_password_hash(password),
            must_change_password=False,
            updated_at=now_in_app_timezone(),
        )
    )


def reset_user_password(session: Session, *, user_id: int) -> tuple[User, str]:
    """Generate a temporary password; the user must change it on next login."""

    repository = UserRepository(session)
    user = _load(repository, user_id)
    temporary_password = generate_secure_password()
    updated = repository.update(
        replace(
            user,
            password=get_password_hash(temporary_password),
            must_change_password=True,
            updated_at=now_in_app_timezone(),
        )
    )
    return updated, temporary_password
