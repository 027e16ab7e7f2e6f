"""Concurrent, failure-isolated email delivery for a single notification."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import partial

import anyio

from classroom.infrastructure.email import EmailDispatcher

logger = logging.getLogger(__name__)

MAX_CONCURRENT_DELIVERIES = 10


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one email send."""

    recipient: str
    message_id: str | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.error is None


def deliver_emails(
    dispatcher: EmailDispatcher,
    recipients: Sequence[str],
    *,
    subject: str,
    html: str,
    text: str,
    timeout: float,
) -> list[DeliveryResult]:
    """Send the same message to every address and report each outcome.

    Blocking entry point for synchronous callers (request handlers run in a
    worker thread). Results follow the order of ``recipients``; a failing or
    slow address never prevents delivery to the others.
    """

    if not recipients:
        return []
    return anyio.run(
        partial(
            _deliver_emails_async,
            dispatcher,
            recipients,
            subject=subject,
            html=html,
            text=text,
            timeout=timeout,
        )
    )


async def _deliver_emails_async(
    dispatcher: EmailDispatcher,
    recipients: Sequence[str],
    *,
    subject: str,
    html: str,
    text: str,
    timeout: float,
) -> list[DeliveryResult]:
    """Run one delivery task per distinct address and collect the outcomes."""

    outcomes: dict[str, DeliveryResult] = {}
    limiter = anyio.CapacityLimiter(MAX_CONCURRENT_DELIVERIES)
    async with anyio.create_task_group() as task_group:
        for recipient in dict.fromkeys(recipients):
            task_group.start_soon(
                _deliver_one,
                dispatcher,
                recipient,
                subject,
                html,
                text,
                timeout,
                limiter,
                outcomes,
            )
    return [outcomes[recipient] for recipient in dict.fromkeys(recipients)]


async def _deliver_one(
    dispatcher: EmailDispatcher,
    recipient: str,
    subject: str,
    html: str,
    text: str,
    timeout: float,
    limiter: anyio.CapacityLimiter,
    outcomes: dict[str, DeliveryResult],
) -> None:
    try:
        with anyio.fail_after(timeout):
            message_id = await anyio.to_thread.run_sync(
                partial(dispatcher.send, recipient, subject, html, text),
                abandon_on_cancel=True,
                limiter=limiter,
            )
    except TimeoutError:
        logger.warning(
            "Email delivery to %s timed out after %.1f seconds", recipient, timeout
        )
        outcomes[recipient] = DeliveryResult(
            recipient=recipient, error=f"timed out after {timeout:g}s"
        )
    except Exception as exc:  # one recipient must never abort the batch
        logger.warning("Failed to send email notification to %s: %s", recipient, exc)
        outcomes[recipient] = DeliveryResult(recipient=recipient, error=str(exc) or repr(exc))
    else:
        outcomes[recipient] = DeliveryResult(recipient=recipient, message_id=message_id or None)


__all__ = [
    "DeliveryResult",
    "MAX_CONCURRENT_DELIVERIES",
    "deliver_emails",
]
