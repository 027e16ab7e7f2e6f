"""Recipient descriptors attached to notifications.

A descriptor is exactly one of four variants. Each variant only carries its
own payload, so a ``mode`` descriptor with group ids cannot be built. The
variants also answer the read-side question "does this notification target
``user``?" through :meth:`matches`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from classroom.domain.errors import ValidationError

from .user import USER_MODES, User

RECIPIENTS_INDIVIDUAL = "individual"
RECIPIENTS_GROUP = "group"
RECIPIENTS_MODE = "mode"
RECIPIENTS_BULK = "bulk"


def _normalize_ids(values: Iterable[Any], *, field_name: str) -> frozenset[int]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ValidationError(f"'{field_name}' must be a list of identifiers")
    normalized: set[int] = set()
    for value in values:
        if isinstance(value, bool):
            raise ValidationError(f"Invalid identifier in '{field_name}': {value!r}")
        try:
            normalized.add(int(value))
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Invalid identifier in '{field_name}': {value!r}"
            ) from exc
    if not normalized:
        raise ValidationError(f"'{field_name}' must contain at least one identifier")
    return frozenset(normalized)


def _normalize_email(value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"Invalid email address: {value!r}")
    email = value.strip().lower()
    local, _, domain = email.partition("@")
    if not local or not domain or "@" in domain or any(c.isspace() for c in email):
        raise ValidationError(f"Invalid email address: {value!r}")
    return email


@dataclass(frozen=True)
class IndividualRecipients:
    """Explicit list of user ids."""

    type: ClassVar[str] = RECIPIENTS_INDIVIDUAL

    user_ids: frozenset[int]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "user_ids", _normalize_ids(self.user_ids, field_name="user_ids")
        )

    def matches(self, user: User) -> bool:
        return user.id in self.user_ids

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "user_ids": sorted(self.user_ids)}


@dataclass(frozen=True)
class GroupRecipients:
    """Every member of any of the listed groups."""

    type: ClassVar[str] = RECIPIENTS_GROUP

    group_ids: frozenset[int]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "group_ids", _normalize_ids(self.group_ids, field_name="group_ids")
        )

    def matches(self, user: User) -> bool:
        return not self.group_ids.isdisjoint(user.assigned_groups or ())

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "group_ids": sorted(self.group_ids)}


@dataclass(frozen=True)
class ModeRecipients:
    """Every user attending in the given mode."""

    type: ClassVar[str] = RECIPIENTS_MODE

    mode: str

    def __post_init__(self) -> None:
        mode = self.mode.strip().lower() if isinstance(self.mode, str) else self.mode
        if mode not in USER_MODES:
            raise ValidationError(
                f"'mode' must be one of {', '.join(USER_MODES)}; got {self.mode!r}"
            )
        object.__setattr__(self, "mode", mode)

    def matches(self, user: User) -> bool:
        # Users without a mode never match a mode broadcast.
        return user.mode is not None and user.mode == self.mode

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "mode": self.mode}


@dataclass(frozen=True)
class BulkRecipients:
    """Raw email addresses, registered or not."""

    type: ClassVar[str] = RECIPIENTS_BULK

    emails: frozenset[str]

    def __post_init__(self) -> None:
        if isinstance(self.emails, (str, bytes)) or not isinstance(self.emails, Iterable):
            raise ValidationError("'emails' must be a list of email addresses")
        emails = frozenset(_normalize_email(email) for email in self.emails)
        if not emails:
            raise ValidationError("'emails' must contain at least one address")
        object.__setattr__(self, "emails", emails)

    def matches(self, user: User) -> bool:
        return bool(user.email) and user.email.strip().lower() in self.emails

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "emails": sorted(self.emails)}


Recipients = Union[IndividualRecipients, GroupRecipients, ModeRecipients, BulkRecipients]

_PAYLOAD_FIELDS: dict[str, str] = {
    RECIPIENTS_INDIVIDUAL: "user_ids",
    RECIPIENTS_GROUP: "group_ids",
    RECIPIENTS_MODE: "mode",
    RECIPIENTS_BULK: "emails",
}


def recipients_from_dict(data: Mapping[str, Any]) -> Recipients:
    """Build a descriptor from its tagged mapping form.

    Raises :class:`ValidationError` when the tag is unknown, the payload for the
    tag is missing or empty, or a payload belonging to another tag is present.
    """

    if not isinstance(data, Mapping):
        raise ValidationError("Recipients must be an object with a 'type' field")

    kind = data.get("type")
    if kind not in _PAYLOAD_FIELDS:
        raise ValidationError(f"Unknown recipients type: {kind!r}")

    expected = _PAYLOAD_FIELDS[kind]
    foreign = [
        name
        for name in _PAYLOAD_FIELDS.values()
        if name != expected and data.get(name) is not None
    ]
    if foreign:
        raise ValidationError(
            f"Recipients of type '{kind}' cannot define {', '.join(sorted(foreign))}"
        )

    payload = data.get(expected)
    if payload is None:
        raise ValidationError(f"Recipients of type '{kind}' require '{expected}'")

    if kind == RECIPIENTS_INDIVIDUAL:
        return IndividualRecipients(user_ids=payload)
    if kind == RECIPIENTS_GROUP:
        return GroupRecipients(group_ids=payload)
    if kind == RECIPIENTS_MODE:
        return ModeRecipients(mode=payload)
    return BulkRecipients(emails=payload)


def recipients_to_dict(recipients: Recipients) -> dict[str, Any]:
    """Return the tagged mapping form used for storage and serialization."""

    return recipients.to_dict()


__all__ = [
    "BulkRecipients",
    "GroupRecipients",
    "IndividualRecipients",
    "ModeRecipients",
    "RECIPIENTS_BULK",
    "RECIPIENTS_GROUP",
    "RECIPIENTS_INDIVIDUAL",
    "RECIPIENTS_MODE",
    "Recipients",
    "recipients_from_dict",
    "recipients_to_dict",
]
