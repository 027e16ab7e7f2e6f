"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from classroom.application.use_cases.users import (
    can_create_announcements,
    can_manage_groups,
    can_manage_users,
)
from classroom.domain.entities import User
from classroom.infrastructure.database import get_db
from classroom.infrastructure.email import EmailDispatcher, SendGridEmailDispatcher
from classroom.infrastructure.repositories import UserRepository
from classroom.infrastructure.security import (
    decode_access_token,
    password_signature,
    refresh_access_token,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_error("User not found")

    if signature_claim != password_signature(user.password, user.is_approved):
        raise _credentials_error()

    return user


def get_current_user(
    request: Request,
    response: Response,
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user and hand out a refreshed token."""

    user = resolve_current_user(token, db)

    try:
        refreshed_token = refresh_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    response.headers["X-Refreshed-Token"] = refreshed_token
    request.state.refreshed_token = refreshed_token

    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has been approved."""

    if not current_user.is_approved:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account pending approval",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user may manage other users."""

    if not can_manage_users(current_user.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return current_user


def require_group_manager(current_user: User = Depends(get_current_active_user)) -> User:
    if not can_manage_groups(current_user.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return current_user


def require_announcer(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user may send notifications."""

    if not can_create_announcements(current_user.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return current_user


def get_email_dispatcher() -> EmailDispatcher | None:
    """Return the configured email dispatcher, or ``None`` when email is disabled."""

    return SendGridEmailDispatcher.from_settings()
