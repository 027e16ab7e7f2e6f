"""Helper utilities shared across API route handlers."""

import logging

from fastapi import HTTPException, status

from classroom.domain.entities import User
from classroom.domain.errors import NotFoundError, PersistenceError
from classroom.interfaces.api.schemas import NotificationPreferencesRead, UserRead

logger = logging.getLogger(__name__)

_PERSISTENCE_DETAIL = "The classroom database is temporarily unavailable"


def http_error_from(exc: Exception) -> HTTPException:
    """Map a domain or use case exception to the matching HTTP error."""

    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, PersistenceError):
        logger.error("Persistence failure: %s", exc)
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_PERSISTENCE_DETAIL
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def to_user_read(user: User) -> UserRead:
    preferences = user.notification_preferences
    return UserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        mode=user.mode,
        is_approved=user.is_approved,
        assigned_groups=sorted(user.assigned_groups),
        notification_preferences=(
            NotificationPreferencesRead.model_validate(preferences)
            if preferences is not None
            else None
        ),
        must_change_password=user.must_change_password,
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


__all__ = ["http_error_from", "to_user_read"]
