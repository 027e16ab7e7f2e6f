"""Timezone helpers shared by the persistence and domain layers.

Timestamps are stored as naive application-local values and handed to the
domain layer as aware datetimes.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from classroom.config import get_settings

logger = logging.getLogger(__name__)

_FALLBACK_TIMEZONE = "Asia/Kolkata"


@lru_cache(maxsize=1)
def _app_timezone() -> tzinfo:
    name = (get_settings().app_timezone or "").strip() or _FALLBACK_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown APP_TIMEZONE %r, using %s", name, _FALLBACK_TIMEZONE)
        return ZoneInfo(_FALLBACK_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for timestamps written by the store."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Read a stored timestamp: naive values are app-local, aware ones are converted."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=_app_timezone())
    return value.astimezone(_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Prepare a domain timestamp for a ``DateTime`` column without timezone support."""

    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(_app_timezone())
    return value.replace(tzinfo=None)
