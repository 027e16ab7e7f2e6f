"""Endpoints for authentication and password management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from classroom.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    change_password,
    record_login,
)
from classroom.domain.entities import User
from classroom.domain.errors import PersistenceError
from classroom.infrastructure.database import get_db
from classroom.infrastructure.security import (
    create_access_token,
    password_signature,
    refresh_access_token,
)
from classroom.interfaces.api.dependencies import get_current_user, oauth2_scheme
from classroom.interfaces.api.schemas import PasswordChangeRequest, Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _issue_token(user: User) -> str:
    return create_access_token(
        data={
            "sub": user.email,
            "role": user.role,
            "pwd_sig": password_signature(user.password, user.is_approved),
        }
    )


# OAuth2PasswordRequestForm names the email field ``username``.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.PENDING_APPROVAL:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account pending approval",
            headers={"WWW-Authenticate": "Bearer"},
        )

    record_login(db, user.id)
    return {
        "access_token": _issue_token(user),
        "token_type": "bearer",
        "role": user.role,
        "must_change_password": auth_status is AuthenticationStatus.MUST_CHANGE_PASSWORD,
    }


@router.get("/token/validate", response_model=Token)
def validate_access_token(
    request: Request,
    current_user: User = Depends(get_current_user),
    token: str = Depends(oauth2_scheme),
):
    """Check the token and renew its expiry."""

    refreshed_token = getattr(request.state, "refreshed_token", None)
    if not refreshed_token:
        try:
            refreshed_token = refresh_access_token(token)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"},
            ) from exc

    return {
        "access_token": refreshed_token,
        "token_type": "bearer",
        "role": current_user.role,
        "must_change_password": current_user.must_change_password,
    }


@router.post("/change-password", response_model=Token)
def change_own_password(
    payload: PasswordChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Replace the caller's password; previously issued tokens stop working."""

    try:
        user = change_password(db, user_id=current_user.id, password=payload.password)
    except PersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc

    logger.info("User %s changed their password", user.id)
    return {
        "access_token": _issue_token(user),
        "token_type": "bearer",
        "role": user.role,
        "must_change_password": False,
    }
