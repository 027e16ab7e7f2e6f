"""Group schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GroupCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None
    discord_link: str | None = Field(default=None, max_length=255)
    hash13_link: str | None = Field(default=None, max_length=255)


class GroupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    discord_link: str | None
    hash13_link: str | None
    created_by: int | None
    member_count: int
    created_at: datetime | None
    updated_at: datetime | None


class GroupUpdate(BaseModel):
    """Partial update; omitted fields stay as they are, empty strings clear links."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    discord_link: str | None = Field(default=None, max_length=255)
    hash13_link: str | None = Field(default=None, max_length=255)
