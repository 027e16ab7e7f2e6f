"""Persistence helpers for notification entities (the notification store)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom.domain.entities import (
    NOTIFICATION_STATUS_READ,
    NOTIFICATION_STATUS_SENT,
    Notification,
    recipients_from_dict,
    recipients_to_dict,
)
from classroom.domain.errors import NotFoundError
from classroom.infrastructure.database import persistence_errors
from classroom.infrastructure.models import NotificationModel, NotificationReadModel
from classroom.utils import ensure_app_naive_datetime, ensure_app_timezone

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Append-only store of notifications plus their reader sets."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        """Insert ``notification``; ``created_at`` defaults to the current time."""

        with persistence_errors(self.session, "store the notification"):
            model = NotificationModel(
                title=notification.title,
                content=notification.content,
                created_by=notification.created_by,
                recipient_type=notification.recipients.type,
                recipients=recipients_to_dict(notification.recipients),
                status=notification.status or NOTIFICATION_STATUS_SENT,
            )
            if notification.created_at is not None:
                model.created_at = ensure_app_naive_datetime(notification.created_at)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        with persistence_errors(self.session, f"load notification {notification_id}"):
            model = self.session.get(NotificationModel, notification_id)
            return self._to_entity(model) if model else None

    def list_all(self, *, limit: int | None = None) -> Sequence[Notification]:
        """Return every notification, newest first."""

        with persistence_errors(self.session, "list notifications"):
            query = self.session.query(NotificationModel).order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            if limit is not None:
                query = query.limit(limit)
            return [self._to_entity(model) for model in query.all()]

    def add_reader(self, notification_id: int, user_id: int) -> Notification:
        """Add ``user_id`` to the reader set and flag the notification as read.

        Re-marking the same reader is a no-op. Two requests racing on the same
        pair end up with a single row thanks to the unique constraint.
        """

        with persistence_errors(self.session, f"mark notification {notification_id} as read"):
            model = self.session.get(NotificationModel, notification_id)
            if model is None:
                msg = f"Notification with id {notification_id} not found"
                raise NotFoundError(msg)

            already_read = (
                self.session.query(NotificationReadModel.id)
                .filter(
                    NotificationReadModel.notification_id == notification_id,
                    NotificationReadModel.user_id == user_id,
                )
                .first()
                is not None
            )
            if not already_read:
                self.session.add(
                    NotificationReadModel(notification_id=notification_id, user_id=user_id)
                )
            model.status = NOTIFICATION_STATUS_READ
            try:
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                logger.debug(
                    "User %s was concurrently marked as reader of notification %s",
                    user_id,
                    notification_id,
                )
                model = self.session.get(NotificationModel, notification_id)
                model.status = NOTIFICATION_STATUS_READ
                self.session.commit()

            self.session.refresh(model)
            return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            content=model.content,
            created_by=model.created_by,
            recipients=recipients_from_dict(model.recipients or {}),
            status=model.status,
            read_by={reader.user_id for reader in model.readers},
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
