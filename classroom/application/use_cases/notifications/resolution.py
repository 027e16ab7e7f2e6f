"""Turn a recipient descriptor into user ids and email addresses."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from classroom.domain.entities import (
    BulkRecipients,
    GroupRecipients,
    IndividualRecipients,
    ModeRecipients,
    Recipients,
)
from classroom.domain.errors import PersistenceError, ValidationError
from classroom.infrastructure.repositories import GroupRepository, UserRepository

logger = logging.getLogger(__name__)


def resolve_recipient_user_ids(session: Session, recipients: Recipients) -> set[int]:
    """Return the ids of the registered users targeted by ``recipients``.

    Bulk descriptors address raw emails and therefore resolve to no user ids.
    Directory failures raise :class:`PersistenceError`.
    """

    if isinstance(recipients, IndividualRecipients):
        return set(recipients.user_ids)
    if isinstance(recipients, GroupRecipients):
        return _resolve_group_members(session, recipients.group_ids)
    if isinstance(recipients, ModeRecipients):
        return set(UserRepository(session).list_ids_by_mode(recipients.mode))
    if isinstance(recipients, BulkRecipients):
        return set()
    raise ValidationError(f"Unsupported recipients: {recipients!r}")


def _resolve_group_members(session: Session, group_ids: Iterable[int]) -> set[int]:
    repository = GroupRepository(session)
    group_ids = sorted(group_ids)
    members: set[int] = set()
    failures = 0
    for group_id in group_ids:
        try:
            members.update(repository.list_member_ids(group_id))
        except PersistenceError:
            failures += 1
            logger.warning("Skipping group %s: its members could not be loaded", group_id)
    if group_ids and failures == len(group_ids):
        raise PersistenceError("Could not load the members of any requested group")
    return members


def resolve_email_addresses(session: Session, recipients: Recipients) -> list[str]:
    """Return the addresses that should receive the notification email.

    Bulk descriptors are used as-is. Other descriptors are resolved to users and
    filtered by their ``email_notifications`` preference (absent means opted in).
    """

    if isinstance(recipients, BulkRecipients):
        return sorted(recipients.emails)

    user_ids = resolve_recipient_user_ids(session, recipients)
    if not user_ids:
        return []

    users = UserRepository(session).get_map_by_ids(user_ids)
    unknown = user_ids - users.keys()
    if unknown:
        logger.info(
            "Ignoring %d recipient id(s) without a user record: %s",
            len(unknown),
            ", ".join(str(user_id) for user_id in sorted(unknown)),
        )

    addresses: set[str] = set()
    opted_out = 0
    for user in users.values():
        if not user.wants_email_notifications():
            opted_out += 1
            continue
        if user.email:
            addresses.add(user.email.strip().lower())
    if opted_out:
        logger.info("%d recipient(s) opted out of notification emails", opted_out)
    return sorted(addresses)


__all__ = ["resolve_email_addresses", "resolve_recipient_user_ids"]
