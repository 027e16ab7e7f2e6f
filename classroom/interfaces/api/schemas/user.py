"""User schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

RoleName = Literal["super_admin", "admin", "group_admin", "student"]
ModeName = Literal["online", "offline"]


class NotificationPreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email_notifications: bool = True
    announcement_emails: bool = True
    group_activity_emails: bool = True


class NotificationPreferencesUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email_notifications: bool | None = None
    announcement_emails: bool | None = None
    group_activity_emails: bool | None = None


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    role: RoleName = "student"
    mode: ModeName | None = "online"
    group_ids: list[int] = Field(default_factory=list)


class BulkUserItem(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str
    mode: ModeName | None = None


class BulkUserCreate(BaseModel):
    users: list[BulkUserItem] = Field(..., min_length=1)
    group_ids: list[int] = Field(default_factory=list)


class BulkUserCreatedRead(BaseModel):
    email: str
    user_id: int
    password: str
    email_sent: bool


class BulkUserErrorRead(BaseModel):
    email: str
    message: str


class BulkUserCreateResponse(BaseModel):
    results: list[BulkUserCreatedRead]
    errors: list[BulkUserErrorRead]


class UserRoleUpdate(BaseModel):
    role: RoleName


class UserModeUpdate(BaseModel):
    mode: ModeName | None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    mode: str | None
    is_approved: bool
    assigned_groups: list[int]
    notification_preferences: NotificationPreferencesRead | None
    must_change_password: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
