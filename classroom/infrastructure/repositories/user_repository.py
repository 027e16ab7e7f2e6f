"""Persistence layer for user data (the user directory)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from classroom.domain.entities import ROLE_STUDENT, NotificationPreferences, User
from classroom.infrastructure.database import persistence_errors
from classroom.infrastructure.models import GroupModel, UserModel
from classroom.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD and lookup operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        role: str | None = None,
        mode: str | None = None,
        is_approved: bool | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[User]:
        with persistence_errors(self.session, "list users"):
            query = self.session.query(UserModel)
            if role is not None:
                query = query.filter(UserModel.role == role)
            if mode is not None:
                query = query.filter(UserModel.mode == mode)
            if is_approved is not None:
                query = query.filter(UserModel.is_approved.is_(is_approved))
            query = query.order_by(UserModel.id.asc()).offset(skip)
            if limit is not None:
                query = query.limit(limit)
            return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        with persistence_errors(self.session, f"load user {user_id}"):
            model = self.session.get(UserModel, user_id)
            return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        with persistence_errors(self.session, "look up a user by email"):
            model = (
                self.session.query(UserModel)
                .filter(UserModel.email == email.strip().lower())
                .first()
            )
            return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return {}
        with persistence_errors(self.session, "load users by id"):
            query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
            return {model.id: self._to_entity(model) for model in query.all()}

    def list_ids_by_mode(self, mode: str) -> list[int]:
        with persistence_errors(self.session, f"list {mode} users"):
            rows = self.session.execute(
                select(UserModel.id).where(UserModel.mode == mode).order_by(UserModel.id)
            )
            return [user_id for (user_id,) in rows]

    def list_student_ids(self) -> list[int]:
        with persistence_errors(self.session, "list students"):
            rows = self.session.execute(
                select(UserModel.id)
                .where(UserModel.role == ROLE_STUDENT)
                .where(UserModel.is_approved.is_(True))
                .order_by(UserModel.id)
            )
            return [user_id for (user_id,) in rows]

    def create(self, user: User) -> User:
        with persistence_errors(self.session, "store the user"):
            model = UserModel()
            self._apply_groups(model, user.assigned_groups)
            self._apply_entity_to_model(model, user, include_creation_fields=True)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if model is None:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        with persistence_errors(self.session, f"update user {user.id}"):
            self._apply_groups(model, user.assigned_groups)
            self._apply_entity_to_model(model, user, include_creation_fields=False)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model)

    def delete(self, user_id: int) -> None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        with persistence_errors(self.session, f"delete user {user_id}"):
            self.session.delete(model)
            self.session.commit()

    def _apply_groups(self, model: UserModel, group_ids: Iterable[int]) -> None:
        wanted = {int(group_id) for group_id in group_ids or ()}
        current = {group.id for group in model.groups}
        if wanted == current:
            return
        groups = (
            self.session.query(GroupModel).filter(GroupModel.id.in_(wanted)).all()
            if wanted
            else []
        )
        missing = wanted - {group.id for group in groups}
        if missing:
            msg = f"Unknown group ids: {', '.join(str(i) for i in sorted(missing))}"
            raise ValueError(msg)
        model.groups = groups

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields and user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        model.name = user.name
        model.email = user.email.strip().lower()
        model.password = user.password
        model.role = user.role
        model.mode = user.mode
        model.is_approved = user.is_approved
        model.must_change_password = user.must_change_password
        model.last_login = ensure_app_naive_datetime(user.last_login)
        preferences = user.notification_preferences or NotificationPreferences()
        model.email_notifications = preferences.email_notifications
        model.announcement_emails = preferences.announcement_emails
        model.group_activity_emails = preferences.group_activity_emails
        if not include_creation_fields and user.updated_at is not None:
            model.updated_at = ensure_app_naive_datetime(user.updated_at)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        preferences = None
        if model.email_notifications is not None:
            preferences = NotificationPreferences(
                email_notifications=model.email_notifications,
                announcement_emails=(
                    True if model.announcement_emails is None else model.announcement_emails
                ),
                group_activity_emails=(
                    True
                    if model.group_activity_emails is None
                    else model.group_activity_emails
                ),
            )
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            mode=model.mode,
            is_approved=bool(model.is_approved),
            assigned_groups={group.id for group in model.groups},
            notification_preferences=preferences,
            must_change_password=bool(model.must_change_password),
            last_login=ensure_app_timezone(model.last_login),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
