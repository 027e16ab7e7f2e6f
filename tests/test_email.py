"""Unit tests for the SendGrid email helpers."""

from __future__ import annotations

import json
import logging
import types

import pytest

from classroom.config import get_settings
from classroom.domain.errors import DeliveryError
from classroom.infrastructure import email as email_module
from classroom.infrastructure.email_templates import render_welcome_email


@pytest.fixture()
def sendgrid_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SENDGRID_API_KEY", "SG.test-key")
    monkeypatch.setenv("SENDGRID_SENDER", "classroom@example.com")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


def _install_client(monkeypatch: pytest.MonkeyPatch, send):
    calls: list[dict] = []

    class _Client:
        def __init__(self, api_key: str) -> None:
            calls.append({"api_key": api_key})

        def send(self, message):
            calls[-1]["message"] = message
            return send(message)

    monkeypatch.setattr(email_module, "SendGridAPIClient", _Client)
    return calls


def test_dispatcher_is_disabled_without_configuration(caplog) -> None:
    with caplog.at_level(logging.INFO):
        assert email_module.SendGridEmailDispatcher.from_settings() is None

    assert "email delivery disabled" in caplog.text
    assert email_module.send_email("Subject", "<p>Hi</p>", "Hi", "user@example.com") is False


def test_dispatcher_returns_message_id(monkeypatch, sendgrid_settings) -> None:
    calls = _install_client(
        monkeypatch,
        lambda message: types.SimpleNamespace(
            status_code=202, body=b"", headers={"X-Message-Id": "abc123"}
        ),
    )

    dispatcher = email_module.SendGridEmailDispatcher.from_settings()
    message_id = dispatcher.send("student@example.com", "Subject", "<p>Hi</p>", "Hi")

    assert message_id == "abc123"
    assert calls[0]["api_key"] == "SG.test-key"
    payload = calls[0]["message"].get()
    assert payload["from"]["email"] == "classroom@example.com"
    assert payload["subject"] == "Subject"
    assert payload["personalizations"][0]["to"][0]["email"] == "student@example.com"


def test_error_response_raises_delivery_error_with_details(
    monkeypatch, sendgrid_settings, caplog
) -> None:
    body = json.dumps({"errors": [{"field": "from", "message": "Sender not verified"}]})
    _install_client(
        monkeypatch,
        lambda message: types.SimpleNamespace(status_code=403, body=body, headers={}),
    )

    dispatcher = email_module.SendGridEmailDispatcher.from_settings()
    with caplog.at_level(logging.ERROR), pytest.raises(DeliveryError) as excinfo:
        dispatcher.send("student@example.com", "Subject", "<p>Hi</p>", "Hi")

    assert excinfo.value.recipient == "student@example.com"
    assert "from: Sender not verified" in str(excinfo.value)
    assert "status 403" in caplog.text


def test_transport_failure_raises_delivery_error(monkeypatch, sendgrid_settings) -> None:
    def _boom(message):
        raise ConnectionError("connection reset")

    _install_client(monkeypatch, _boom)

    dispatcher = email_module.SendGridEmailDispatcher.from_settings()
    with pytest.raises(DeliveryError):
        dispatcher.send("student@example.com", "Subject", "<p>Hi</p>", "Hi")


def test_send_email_reports_failure_as_false(monkeypatch, sendgrid_settings) -> None:
    _install_client(
        monkeypatch,
        lambda message: types.SimpleNamespace(status_code=500, body=None, headers={}),
    )

    assert email_module.send_email("Subject", "<p>Hi</p>", "Hi", "a@example.com") is False


def test_welcome_email_contains_credentials() -> None:
    subject, html, text = render_welcome_email(
        name="Ravi <script>", email="ravi@example.com", password="Pa$$w0rd!"
    )

    assert "LinuxWorld Classroom" in subject
    assert "Ravi &lt;script&gt;" in html
    assert "Pa$$w0rd!" in text
    assert "ravi@example.com" in text


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (None, None),
        (b"plain failure", "plain failure"),
        ('{"errors": [{"message": "bad key"}]}', "bad key"),
        ([1, 2], "1; 2"),
    ],
)
def test_extract_sendgrid_error_details(body, expected) -> None:
    assert email_module._extract_sendgrid_error_details(body) == expected
