"""Tests for the concurrent email fan-out."""

from __future__ import annotations

import threading

from classroom.application.use_cases.notifications import deliver_emails

from conftest import RecordingDispatcher


class _SlowDispatcher(RecordingDispatcher):
    def __init__(self, slow: str) -> None:
        super().__init__()
        self.slow = slow
        self.release = threading.Event()

    def send(self, to, subject, html, text):
        if to == self.slow:
            self.release.wait(timeout=5)
        return super().send(to, subject, html, text)


def test_results_follow_input_order_and_skip_duplicates():
    dispatcher = RecordingDispatcher(failing={"b@example.com"})

    results = deliver_emails(
        dispatcher,
        ["c@example.com", "b@example.com", "a@example.com", "c@example.com"],
        subject="Subject",
        html="<p>Body</p>",
        text="Body",
        timeout=5,
    )

    assert [result.recipient for result in results] == [
        "c@example.com",
        "b@example.com",
        "a@example.com",
    ]
    assert [result.delivered for result in results] == [True, False, True]
    assert "rejected" in results[1].error
    assert results[0].message_id.startswith("msg-")
    assert dispatcher.recipients == ["a@example.com", "c@example.com"]


def test_slow_recipient_times_out_without_blocking_others():
    dispatcher = _SlowDispatcher(slow="slow@example.com")
    try:
        results = deliver_emails(
            dispatcher,
            ["fast@example.com", "slow@example.com"],
            subject="Subject",
            html="<p>Body</p>",
            text="Body",
            timeout=0.2,
        )
    finally:
        dispatcher.release.set()

    outcome = {result.recipient: result for result in results}
    assert outcome["fast@example.com"].delivered
    assert not outcome["slow@example.com"].delivered
    assert "timed out" in outcome["slow@example.com"].error


def test_no_recipients_means_no_work():
    assert (
        deliver_emails(
            RecordingDispatcher(), [], subject="s", html="h", text="t", timeout=1
        )
        == []
    )
