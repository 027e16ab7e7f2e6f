"""Tests for the application timezone helpers."""

from datetime import datetime, timedelta, timezone

from classroom.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


def test_aware_values_are_stored_as_app_local_time():
    stored = ensure_app_naive_datetime(datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert stored == datetime(2024, 1, 1, 5, 30)
    assert stored.tzinfo is None


def test_stored_values_are_read_back_as_aware_app_time():
    loaded = ensure_app_timezone(datetime(2024, 1, 1, 5, 30))

    assert loaded.utcoffset() == timedelta(hours=5, minutes=30)
    assert loaded == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert ensure_app_timezone(None) is None
    assert ensure_app_naive_datetime(None) is None


def test_now_is_aware():
    assert now_in_app_timezone().utcoffset() == timedelta(hours=5, minutes=30)
