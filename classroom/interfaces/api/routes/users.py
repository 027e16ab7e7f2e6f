"""Routes for managing users, their roles and their preferences."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from classroom.application.use_cases.users import (
    BulkUserEntry,
    approve_user,
    bulk_create_users,
    can_approve_users,
    can_assign_role,
    can_view_all_users,
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
    reset_user_password,
    update_notification_preferences,
    update_user_mode,
    update_user_role,
)
from classroom.domain.entities import ROLE_STUDENT, User
from classroom.domain.errors import NotFoundError, PersistenceError
from classroom.infrastructure.database import get_db
from classroom.infrastructure.email import send_credentials_email, send_welcome_email
from classroom.infrastructure.security import generate_secure_password
from classroom.interfaces.api.dependencies import get_current_active_user, require_admin
from classroom.interfaces.api.routes_helpers import http_error_from, to_user_read
from classroom.interfaces.api.schemas import (
    BulkUserCreate,
    BulkUserCreateResponse,
    NotificationPreferencesUpdate,
    UserCreate,
    UserModeUpdate,
    UserRead,
    UserRoleUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Create an approved account and email its generated credentials."""

    if user_in.role != ROLE_STUDENT and not can_assign_role(current_user.role, user_in.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

    generated_password = generate_secure_password()
    try:
        user = create_user_uc(
            db,
            name=user_in.name,
            email=user_in.email,
            password=generated_password,
            role=user_in.role,
            mode=user_in.mode,
            is_approved=True,
            must_change_password=True,
            group_ids=user_in.group_ids,
        )
    except (ValueError, PersistenceError) as exc:
        raise http_error_from(exc) from exc

    if not send_welcome_email(user.email, user.name, generated_password):
        logger.warning("Could not send the welcome email to user %s", user.email)

    return to_user_read(user)


@router.post("/bulk", response_model=BulkUserCreateResponse)
def register_users_in_bulk(
    payload: BulkUserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Create many student accounts; failures are reported per entry."""

    entries = [
        BulkUserEntry(name=item.name, email=item.email, mode=item.mode)
        for item in payload.users
    ]
    try:
        outcome = bulk_create_users(
            db,
            entries,
            group_ids=payload.group_ids,
            send_welcome_email=send_welcome_email,
        )
    except (ValueError, PersistenceError) as exc:
        raise http_error_from(exc) from exc

    return BulkUserCreateResponse(
        results=[asdict(result) for result in outcome.results],
        errors=[asdict(error) for error in outcome.errors],
    )


@router.get("/", response_model=list[UserRead])
def list_users(
    role: str | None = Query(None),
    mode: str | None = Query(None),
    is_approved: bool | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Return registered users, optionally filtered by role, mode and approval.

    ``is_approved=false`` lists the accounts waiting for approval.
    """

    try:
        users = list_users_uc(
            db, role=role, mode=mode, is_approved=is_approved, skip=skip, limit=limit
        )
    except (ValueError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return [to_user_read(user) for user in users]


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    return to_user_read(current_user)


@router.put("/me/notification-preferences", response_model=UserRead)
def update_my_notification_preferences(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Update the caller's email preferences; omitted flags stay unchanged."""

    try:
        user = update_notification_preferences(
            db, user_id=current_user.id, **payload.model_dump(exclude_none=True)
        )
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    if user_id != current_user.id and not can_view_all_users(current_user.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    try:
        user = get_user_uc(db, user_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)


@router.patch("/{user_id}/approve", response_model=UserRead)
def approve(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Let a pending user sign in."""

    if not can_approve_users(current_user.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    try:
        user = approve_user(db, user_id=user_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    logger.info("User %s approved by %s", user_id, current_user.id)
    return to_user_read(user)


@router.patch("/{user_id}/role", response_model=UserRead)
def change_role(
    user_id: int,
    payload: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot change your own role"
        )
    try:
        user = update_user_role(db, user_id=user_id, role=payload.role, actor=current_user)
    except (ValueError, LookupError, PermissionError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)


@router.patch("/{user_id}/mode", response_model=UserRead)
def change_mode(
    user_id: int,
    payload: UserModeUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        user = update_user_mode(db, user_id=user_id, mode=payload.mode)
    except (ValueError, LookupError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)


@router.post("/{user_id}/reset-password", status_code=status.HTTP_204_NO_CONTENT)
def reset_password(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Issue a temporary password and email it to the user."""

    try:
        user, temporary_password = reset_user_password(db, user_id=user_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc

    if not send_credentials_email(user.email, user.name, temporary_password):
        logger.warning("Could not send the temporary password to user %s", user.email)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account"
        )
    try:
        delete_user_uc(db, user_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
