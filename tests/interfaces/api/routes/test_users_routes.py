"""Integration tests for the user API endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from classroom.interfaces.api.routes import users as users_routes


@pytest.fixture()
def welcome_emails(monkeypatch):
    sent: list[tuple[str, str, str]] = []

    def _record(email, name, password):
        sent.append((email, name, password))
        return True

    monkeypatch.setattr(users_routes, "send_welcome_email", _record)
    return sent


def test_admin_creates_user_and_user_signs_in(client, make_user, login, welcome_emails):
    make_user(email="admin@example.com", role="admin", mode=None)
    headers = login("admin@example.com")

    response = client.post(
        "/users/",
        json={"name": "Kiran", "email": "Kiran@Example.com", "mode": "offline"},
        headers=headers,
    )

    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "kiran@example.com"
    assert created["role"] == "student"
    assert created["is_approved"] is True
    assert created["must_change_password"] is True
    assert created["notification_preferences"]["email_notifications"] is True

    ((email, name, password),) = welcome_emails
    assert (email, name) == ("kiran@example.com", "Kiran")
    token = client.post("/auth/token", data={"username": email, "password": password})
    assert token.json()["must_change_password"] is True


def test_duplicate_email_is_a_bad_request(client, make_user, login, welcome_emails):
    make_user(email="admin@example.com", role="admin", mode=None)
    make_user(email="taken@example.com")

    response = client.post(
        "/users/",
        json={"name": "Again", "email": "taken@example.com"},
        headers=login("admin@example.com"),
    )

    assert response.status_code == 400
    assert welcome_emails == []


def test_admin_cannot_create_admins(client, make_user, login, welcome_emails):
    make_user(email="admin@example.com", role="admin", mode=None)

    response = client.post(
        "/users/",
        json={"name": "Boss", "email": "boss@example.com", "role": "admin"},
        headers=login("admin@example.com"),
    )

    assert response.status_code == 403


def test_students_cannot_manage_users(client, make_user, login):
    student = make_user(email="student@example.com")
    other = make_user(email="other@example.com")
    headers = login("student@example.com")

    assert client.get("/users/", headers=headers).status_code == 403
    assert client.get(f"/users/{other.id}", headers=headers).status_code == 403
    assert client.get(f"/users/{student.id}", headers=headers).status_code == 200
    assert client.patch(f"/users/{other.id}/approve", headers=headers).status_code == 403


def test_bulk_create_reports_results_and_errors(client, make_user, login, welcome_emails):
    make_user(email="admin@example.com", role="admin", mode=None)

    response = client.post(
        "/users/bulk",
        json={
            "users": [
                {"name": "One", "email": "one@example.com"},
                {"name": "Admin clash", "email": "admin@example.com"},
            ]
        },
        headers=login("admin@example.com"),
    )

    assert response.status_code == 200
    body = response.json()
    assert [result["email"] for result in body["results"]] == ["one@example.com"]
    assert body["results"][0]["email_sent"] is True
    assert [error["email"] for error in body["errors"]] == ["admin@example.com"]


def test_listing_approval_role_and_mode_changes(client, make_user, login):
    make_user(email="admin@example.com", role="admin", mode=None)
    pending = make_user(email="pending@example.com", is_approved=False)
    headers = login("admin@example.com")

    listed = client.get("/users/", params={"role": "student"}, headers=headers)
    assert [user["email"] for user in listed.json()] == ["pending@example.com"]
    assert client.get("/users/", params={"role": "wizard"}, headers=headers).status_code == 400

    approved = client.patch(f"/users/{pending.id}/approve", headers=headers)
    assert approved.status_code == 200
    assert approved.json()["is_approved"] is True

    promoted = client.patch(
        f"/users/{pending.id}/role", json={"role": "group_admin"}, headers=headers
    )
    assert promoted.json()["role"] == "group_admin"
    forbidden = client.patch(
        f"/users/{pending.id}/role", json={"role": "super_admin"}, headers=headers
    )
    assert forbidden.status_code == 403

    moved = client.patch(f"/users/{pending.id}/mode", json={"mode": "offline"}, headers=headers)
    assert moved.json()["mode"] == "offline"

    assert client.patch("/users/999/approve", headers=headers).status_code == 404


def test_pending_accounts_can_be_listed_for_approval(client, make_user, login):
    make_user(email="admin@example.com", role="admin", mode=None)
    make_user(email="approved@example.com")
    pending = make_user(email="pending@example.com", is_approved=False)
    headers = login("admin@example.com")

    waiting = client.get("/users/", params={"is_approved": "false"}, headers=headers)
    assert waiting.status_code == 200
    assert [user["email"] for user in waiting.json()] == ["pending@example.com"]

    client.patch(f"/users/{pending.id}/approve", headers=headers)

    assert client.get("/users/", params={"is_approved": "false"}, headers=headers).json() == []
    approved = client.get("/users/", params={"is_approved": "true"}, headers=headers).json()
    assert [user["email"] for user in approved] == [
        "admin@example.com",
        "approved@example.com",
        "pending@example.com",
    ]


def test_notification_preferences_update(client, make_user, login):
    make_user(email="student@example.com")
    headers = login("student@example.com")

    response = client.put(
        "/users/me/notification-preferences",
        json={"email_notifications": False},
        headers=headers,
    )

    assert response.status_code == 200
    preferences = response.json()["notification_preferences"]
    assert preferences == {
        "email_notifications": False,
        "announcement_emails": True,
        "group_activity_emails": True,
    }


def test_reset_password_and_delete(client, make_user, login, monkeypatch):
    make_user(email="admin@example.com", role="admin", mode=None)
    student = make_user(email="student@example.com")
    headers = login("admin@example.com")
    sent: list[str] = []
    monkeypatch.setattr(
        users_routes,
        "send_credentials_email",
        lambda email, name, password: sent.append(password) or True,
    )

    assert client.post(f"/users/{student.id}/reset-password", headers=headers).status_code == 204
    (temporary,) = sent
    token = client.post(
        "/auth/token", data={"username": "student@example.com", "password": temporary}
    )
    assert token.json()["must_change_password"] is True

    assert client.delete(f"/users/{student.id}", headers=headers).status_code == 204
    assert client.get(f"/users/{student.id}", headers=headers).status_code == 404
    me = client.get("/users/me", headers=headers).json()
    assert client.delete(f"/users/{me['id']}", headers=headers).status_code == 400
