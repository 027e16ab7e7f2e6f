"""Integration tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


@pytest.fixture()
def admin_headers(make_user, login):
    make_user(email="admin@example.com", role="admin", mode=None)
    return login("admin@example.com")


def test_send_to_all_students_expands_to_individual_ids(
    client, make_user, admin_headers, dispatcher
):
    first = make_user(email="first@example.com")
    second = make_user(email="second@example.com", mode="offline")
    make_user(email="pending@example.com", is_approved=False)
    make_user(email="mentor@example.com", role="group_admin")

    response = client.post(
        "/notifications/",
        json={
            "title": "Welcome week",
            "content": "Orientation starts Monday.",
            "recipients": {"type": "all"},
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["notification"]["recipients"] == {
        "type": "individual",
        "user_ids": [first.id, second.id],
    }
    assert sorted(body["emails_delivered"]) == ["first@example.com", "second@example.com"]
    assert body["emails_failed"] == []
    assert dispatcher.recipients == ["first@example.com", "second@example.com"]


def test_failed_emails_are_reported_not_raised(client, make_user, admin_headers, dispatcher):
    make_user(email="ok@example.com", mode="offline")
    make_user(email="bounce@example.com", mode="offline")
    dispatcher.failing.add("bounce@example.com")

    response = client.post(
        "/notifications/",
        json={
            "title": "Lab",
            "content": "Bring your laptop.",
            "recipients": {"type": "mode", "mode": "offline"},
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["emails_delivered"] == ["ok@example.com"]
    assert response.json()["emails_failed"] == ["bounce@example.com"]


@pytest.mark.parametrize(
    "recipients",
    [
        {"type": "group"},
        {"type": "group", "group_ids": []},
        {"type": "mode", "mode": "hybrid"},
        {"type": "bulk", "emails": ["not-an-email"]},
        {"type": "everyone"},
    ],
)
def test_malformed_recipients_are_rejected(client, admin_headers, recipients):
    response = client.post(
        "/notifications/",
        json={"title": "Bad", "content": "Bad", "recipients": recipients},
        headers=admin_headers,
    )

    assert response.status_code == 422
    history = client.get("/notifications/all", headers=admin_headers)
    assert history.json() == []


def test_students_cannot_send_notifications(client, make_user, login):
    make_user(email="student@example.com")

    response = client.post(
        "/notifications/",
        json={
            "title": "Hi",
            "content": "Hi",
            "recipients": {"type": "mode", "mode": "online"},
        },
        headers=login("student@example.com"),
    )

    assert response.status_code == 403


def test_group_admins_can_send_but_not_read_history(client, make_user, login):
    make_user(email="mentor@example.com", role="group_admin")
    headers = login("mentor@example.com")

    sent = client.post(
        "/notifications/",
        json={
            "title": "Mentor hours",
            "content": "Thursday 5pm.",
            "recipients": {"type": "bulk", "emails": ["guest@example.org"]},
        },
        headers=headers,
    )

    assert sent.status_code == 201
    assert client.get("/notifications/all", headers=headers).status_code == 403


def test_feed_and_mark_as_read(client, make_user, login, admin_headers):
    group_member = make_user(email="member@example.com")
    make_user(email="outsider@example.com")
    group = client.post("/groups/", json={"name": "Cloud"}, headers=admin_headers).json()
    client.post(f"/groups/{group['id']}/members/{group_member.id}", headers=admin_headers)

    created = client.post(
        "/notifications/",
        json={
            "title": "Cloud lab",
            "content": "AWS credits are live.",
            "recipients": {"type": "group", "group_ids": [group["id"]]},
        },
        headers=admin_headers,
    ).json()["notification"]

    member_headers = login("member@example.com")
    feed = client.get("/notifications/", headers=member_headers).json()
    assert [item["id"] for item in feed] == [created["id"]]
    assert feed[0]["is_read"] is False

    outsider_headers = login("outsider@example.com")
    assert client.get("/notifications/", headers=outsider_headers).json() == []
    assert (
        client.post(f"/notifications/{created['id']}/read", headers=outsider_headers).status_code
        == 404
    )

    for _ in range(2):
        read = client.post(f"/notifications/{created['id']}/read", headers=member_headers)
        assert read.status_code == 200
    assert read.json()["read_by"] == [group_member.id]
    assert read.json()["status"] == "read"
    assert client.get("/notifications/", headers=member_headers).json()[0]["is_read"] is True

    history = client.get("/notifications/all", headers=admin_headers).json()
    assert [item["id"] for item in history] == [created["id"]]


def test_all_students_without_students_is_a_bad_request(client, admin_headers):
    response = client.post(
        "/notifications/",
        json={"title": "Empty", "content": "Nobody here", "recipients": {"type": "all"}},
        headers=admin_headers,
    )

    assert response.status_code == 400
