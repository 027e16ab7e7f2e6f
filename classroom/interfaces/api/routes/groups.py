"""Routes for classroom groups and their membership."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from classroom.application.use_cases.groups import (
    assign_user_to_group,
    create_group as create_group_uc,
    delete_group as delete_group_uc,
    get_group as get_group_uc,
    list_groups as list_groups_uc,
    remove_user_from_group,
    update_group as update_group_uc,
)
from classroom.domain.entities import Group, User
from classroom.domain.errors import NotFoundError, PersistenceError
from classroom.infrastructure.database import get_db
from classroom.interfaces.api.dependencies import (
    get_current_active_user,
    require_group_manager,
)
from classroom.interfaces.api.routes_helpers import http_error_from, to_user_read
from classroom.interfaces.api.schemas import GroupCreate, GroupRead, GroupUpdate, UserRead

router = APIRouter(prefix="/groups", tags=["groups"])
logger = logging.getLogger(__name__)


def _to_read_model(group: Group) -> GroupRead:
    return GroupRead.model_validate(group)


@router.post("/", response_model=GroupRead, status_code=status.HTTP_201_CREATED)
def create_group(
    payload: GroupCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_group_manager),
):
    try:
        group = create_group_uc(
            db,
            name=payload.name,
            created_by=current_user.id,
            description=payload.description,
            discord_link=payload.discord_link,
            hash13_link=payload.hash13_link,
        )
    except (ValueError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    logger.info("Group %s created by user %s", group.id, current_user.id)
    return _to_read_model(group)


@router.get("/", response_model=list[GroupRead])
def list_groups(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
):
    """Return every group with its member count."""

    try:
        groups = list_groups_uc(db)
    except PersistenceError as exc:
        raise http_error_from(exc) from exc
    return [_to_read_model(group) for group in groups]


@router.get("/{group_id}", response_model=GroupRead)
def read_group(
    group_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
):
    try:
        group = get_group_uc(db, group_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(group)


@router.patch("/{group_id}", response_model=GroupRead)
def update_group(
    group_id: int,
    payload: GroupUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_group_manager),
):
    try:
        group = update_group_uc(db, group_id=group_id, **payload.model_dump(exclude_none=True))
    except (ValueError, NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    logger.info("Group %s updated by user %s", group.id, current_user.id)
    return _to_read_model(group)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_group(
    group_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_group_manager),
):
    """Delete the group; its members simply lose the assignment."""

    try:
        delete_group_uc(db, group_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{group_id}/members/{user_id}", response_model=UserRead)
def add_member(
    group_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_group_manager),
):
    try:
        user = assign_user_to_group(db, group_id=group_id, user_id=user_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)


@router.delete("/{group_id}/members/{user_id}", response_model=UserRead)
def remove_member(
    group_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_group_manager),
):
    try:
        user = remove_user_from_group(db, group_id=group_id, user_id=user_id)
    except (NotFoundError, PersistenceError) as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)
