"""SQLAlchemy models for groups and their membership."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text, func
from sqlalchemy.orm import relationship

from classroom.infrastructure.database import Base

group_membership_table = Table(
    "group_membership",
    Base.metadata,
    Column(
        "user_id",
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "group_id",
        Integer,
        ForeignKey("classroom_group.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class GroupModel(Base):
    """Database representation of a classroom group."""

    __tablename__ = "classroom_group"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    discord_link = Column(String(255), nullable=True)
    hash13_link = Column(String(255), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    members = relationship(
        "UserModel",
        secondary=group_membership_table,
        back_populates="groups",
        passive_deletes=True,
    )


__all__ = ["GroupModel", "group_membership_table"]
