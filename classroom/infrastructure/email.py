"""Transactional email delivery via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from classroom.config import get_settings
from classroom.domain.errors import DeliveryError

from .email_templates import (
    render_credentials_email,
    render_welcome_email,
)

logger = logging.getLogger(__name__)


class EmailDispatcher(Protocol):
    """Anything able to deliver one message and return its provider id."""

    def send(self, to: str, subject: str, html: str, text: str) -> str:
        ...


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict) or not item.get("message"):
                    continue
                field = item.get("field")
                message = str(item["message"])
                messages.append(f"{field}: {message}" if field else message)
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(source: Any) -> str:
    status_code = getattr(source, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(source, "body", None))
    if status_code and details:
        return f"status {status_code}: {details}"
    if status_code:
        return f"status {status_code}"
    return details or str(source) or source.__class__.__name__


def _message_id(response: Any) -> str:
    headers = getattr(response, "headers", None)
    if headers is not None and hasattr(headers, "get"):
        message_id = headers.get("X-Message-Id")
        if message_id:
            return str(message_id)
    return ""


class SendGridEmailDispatcher:
    """Deliver messages through the SendGrid v3 REST API."""

    def __init__(self, api_key: str, sender: str) -> None:
        self._api_key = api_key
        self._sender = sender

    @classmethod
    def from_settings(cls) -> "SendGridEmailDispatcher | None":
        """Return a dispatcher, or ``None`` when SendGrid is not configured."""

        settings = get_settings()
        if not settings.email_enabled:
            logger.info("SendGrid configuration incomplete; email delivery disabled")
            return None
        return cls(settings.sendgrid_api_key, settings.sendgrid_sender)

    def send(self, to: str, subject: str, html: str, text: str) -> str:
        message = Mail(
            from_email=self._sender,
            to_emails=to,
            subject=subject,
            html_content=html,
            plain_text_content=text,
        )
        try:
            response = SendGridAPIClient(self._api_key).send(message)
        except Exception as exc:
            description = _describe_failure(exc)
            logger.error("SendGrid API request for %s failed with %s", to, description)
            raise DeliveryError(
                f"SendGrid request failed with {description}", recipient=to
            ) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            description = _describe_failure(response)
            logger.error("SendGrid API responded to %s with %s", to, description)
            raise DeliveryError(f"SendGrid responded with {description}", recipient=to)

        return _message_id(response)


def send_email(subject: str, html_content: str, text_content: str, recipient: str) -> bool:
    """Send a single email, returning ``False`` instead of raising on failure."""

    dispatcher = SendGridEmailDispatcher.from_settings()
    if dispatcher is None:
        return False
    try:
        dispatcher.send(recipient, subject, html_content, text_content)
    except DeliveryError:
        return False
    return True


def send_welcome_email(email: str, name: str, password: str) -> bool:
    """Send the account-created email with the generated credentials."""

    subject, html, text = render_welcome_email(name=name, email=email, password=password)
    return send_email(subject, html, text, email)


def send_credentials_email(email: str, name: str, password: str) -> bool:
    """Send a freshly generated temporary password."""

    subject, html, text = render_credentials_email(name=name, password=password)
    return send_email(subject, html, text, email)


__all__ = [
    "EmailDispatcher",
    "SendGridEmailDispatcher",
    "send_credentials_email",
    "send_email",
    "send_welcome_email",
]
