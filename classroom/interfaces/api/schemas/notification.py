"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class IndividualRecipientsIn(BaseModel):
    type: Literal["individual"]
    user_ids: list[int] = Field(..., min_length=1)


class GroupRecipientsIn(BaseModel):
    type: Literal["group"]
    group_ids: list[int] = Field(..., min_length=1)


class ModeRecipientsIn(BaseModel):
    type: Literal["mode"]
    mode: Literal["online", "offline"]


class BulkRecipientsIn(BaseModel):
    type: Literal["bulk"]
    emails: list[EmailStr] = Field(..., min_length=1)


class AllStudentsRecipientsIn(BaseModel):
    """Shortcut expanded to the ids of every approved student before sending."""

    type: Literal["all"]


RecipientsIn = Annotated[
    Union[
        IndividualRecipientsIn,
        GroupRecipientsIn,
        ModeRecipientsIn,
        BulkRecipientsIn,
        AllStudentsRecipientsIn,
    ],
    Field(discriminator="type"),
]


class NotificationCreate(BaseModel):
    """Payload used by administrators to send a notification."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    recipients: RecipientsIn


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    title: str
    content: str
    created_by: int | None
    created_at: datetime | None
    recipients: dict[str, Any]
    status: str
    read_by: list[int] = Field(default_factory=list)
    is_read: bool | None = None


class NotificationSendResponse(BaseModel):
    """Result of a send: the stored notification and the email outcome."""

    notification: NotificationRead
    emails_delivered: list[str] = Field(default_factory=list)
    emails_failed: list[str] = Field(default_factory=list)


__all__ = [
    "AllStudentsRecipientsIn",
    "BulkRecipientsIn",
    "GroupRecipientsIn",
    "IndividualRecipientsIn",
    "ModeRecipientsIn",
    "NotificationCreate",
    "NotificationRead",
    "NotificationSendResponse",
    "RecipientsIn",
]
