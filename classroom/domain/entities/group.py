"""Domain entity representing a cohort group."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Group:
    """A classroom group. Membership lives on the users' assigned groups."""

    id: int | None
    name: str
    description: str | None
    created_by: int | None
    discord_link: str | None = None
    hash13_link: str | None = None
    member_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Group"]
