"""SQLAlchemy models for persisted notifications."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from classroom.infrastructure.database import Base
from classroom.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of a notification and its recipient descriptor."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    created_by = Column(Integer, nullable=True, index=True)
    recipient_type = Column(String(20), nullable=False, index=True)
    recipients = Column(JSON, nullable=False)
    status = Column(String(20), nullable=False, default="sent")
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )

    readers = relationship(
        "NotificationReadModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class NotificationReadModel(Base):
    """One row per reader; the unique constraint gives ``read_by`` set semantics."""

    __tablename__ = "notification_read"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_notification_read"),
    )

    id = Column(Integer, primary_key=True)
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(Integer, nullable=False, index=True)
    read_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    notification = relationship("NotificationModel", back_populates="readers")


__all__ = ["NotificationModel", "NotificationReadModel"]
