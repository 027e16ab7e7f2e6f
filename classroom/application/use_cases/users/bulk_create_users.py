"""Use case for provisioning many student accounts at once."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classroom.domain.entities import MODE_ONLINE, ROLE_STUDENT
from classroom.domain.errors import PersistenceError
from classroom.infrastructure.repositories import GroupRepository
from classroom.infrastructure.security import generate_secure_password

from .create_user import create_user

logger = logging.getLogger(__name__)

WelcomeEmailSender = Callable[[str, str, str], bool]


@dataclass(frozen=True)
class BulkUserEntry:
    name: str
    email: str
    mode: str | None = None


@dataclass(frozen=True)
class BulkCreatedUser:
    email: str
    user_id: int
    password: str
    email_sent: bool


@dataclass(frozen=True)
class BulkCreateError:
    email: str
    message: str


@dataclass
class BulkCreateResult:
    results: list[BulkCreatedUser] = field(default_factory=list)
    errors: list[BulkCreateError] = field(default_factory=list)


def bulk_create_users(
    session: Session,
    entries: Sequence[BulkUserEntry],
    *,
    group_ids: Iterable[int] = (),
    send_welcome_email: WelcomeEmailSender | None = None,
) -> BulkCreateResult:
    """Create approved student accounts with generated passwords.

    Every entry is processed independently: a duplicate email or a database
    error is recorded in ``errors`` and the remaining entries still run.
    Accounts are assigned to ``group_ids`` and, when a sender is given,
    receive a welcome email with their temporary password.
    """

    selected_groups = sorted({int(group_id) for group_id in group_ids})
    groups = GroupRepository(session)
    unknown = [group_id for group_id in selected_groups if not groups.exists(group_id)]
    if unknown:
        raise ValueError(f"Unknown group ids: {', '.join(str(i) for i in unknown)}")

    outcome = BulkCreateResult()
    for entry in entries:
        password = generate_secure_password()
        try:
            user = create_user(
                session,
                name=entry.name,
                email=entry.email,
                password=password,
                role=ROLE_STUDENT,
                mode=entry.mode or MODE_ONLINE,
                is_approved=True,
                must_change_password=True,
                group_ids=selected_groups,
            )
        except (ValueError, PersistenceError, SQLAlchemyError) as exc:
            session.rollback()
            logger.warning("Could not create user %s: %s", entry.email, exc)
            outcome.errors.append(BulkCreateError(email=entry.email, message=str(exc)))
            continue

        email_sent = False
        if send_welcome_email is not None:
            email_sent = send_welcome_email(user.email, user.name, password)
            if not email_sent:
                logger.warning("Welcome email to %s could not be sent", user.email)

        outcome.results.append(
            BulkCreatedUser(
                email=user.email, user_id=user.id, password=password, email_sent=email_sent
            )
        )

    logger.info(
        "Bulk provisioning finished: %d created, %d failed",
        len(outcome.results),
        len(outcome.errors),
    )
    return outcome
