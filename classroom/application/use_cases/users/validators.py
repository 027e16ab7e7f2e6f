"""Common validation helpers for user use cases."""

import re

from classroom.domain.entities import USER_MODES, USER_ROLES
from classroom.domain.errors import ValidationError

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    """Return the lower-cased address or raise :class:`ValidationError`."""

    normalized = (email or "").strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        raise ValidationError(f"Invalid email address: {email!r}")
    return normalized


def ensure_valid_role(role: str) -> str:
    normalized = (role or "").strip().lower()
    if normalized not in USER_ROLES:
        raise ValidationError(f"Unknown role: {role!r}")
    return normalized


def ensure_valid_mode(mode: str | None) -> str | None:
    if mode is None:
        return None
    normalized = mode.strip().lower()
    if normalized not in USER_MODES:
        raise ValidationError(f"Mode must be one of {', '.join(USER_MODES)}")
    return normalized
