"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from classroom.infrastructure.database import Base

from .group import group_membership_table


class UserModel(Base):
    """Database representation of a platform user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)
    mode = Column(String(10), nullable=True, index=True)
    is_approved = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    must_change_password = Column(Boolean, nullable=False, default=False)
    # Nullable so that accounts imported without preferences still count as opted in.
    email_notifications = Column(Boolean, nullable=True, default=True)
    announcement_emails = Column(Boolean, nullable=True, default=True)
    group_activity_emails = Column(Boolean, nullable=True, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    groups = relationship(
        "GroupModel",
        secondary=group_membership_table,
        back_populates="members",
        lazy="selectin",
    )


__all__ = ["UserModel"]
