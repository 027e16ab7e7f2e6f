"""Tests for the authentication token endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


def test_login_returns_token_and_role(client, make_user) -> None:
    make_user(email="admin@example.com", role="admin", mode=None)

    response = client.post(
        "/auth/token",
        data={"username": "admin@example.com", "password": "Secret123!"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "admin"
    assert payload["must_change_password"] is False
    assert payload["access_token"]


def test_login_rejects_wrong_password(client, make_user) -> None:
    make_user(email="student@example.com")

    response = client.post(
        "/auth/token",
        data={"username": "student@example.com", "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_pending_accounts_cannot_sign_in(client, make_user) -> None:
    make_user(email="pending@example.com", is_approved=False)

    response = client.post(
        "/auth/token",
        data={"username": "pending@example.com", "password": "Secret123!"},
    )

    assert response.status_code == 403


def test_forced_password_change_flow(client, make_user, login) -> None:
    make_user(email="new@example.com", must_change_password=True)

    response = client.post(
        "/auth/token",
        data={"username": "new@example.com", "password": "Secret123!"},
    )
    assert response.status_code == 200
    assert response.json()["must_change_password"] is True
    old_headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

    change = client.post(
        "/auth/change-password",
        json={"password": "Changed123!"},
        headers=old_headers,
    )
    assert change.status_code == 200
    assert change.json()["must_change_password"] is False

    # The password signature in the old token no longer matches.
    assert client.get("/users/me", headers=old_headers).status_code == 401

    new_headers = {"Authorization": f"Bearer {change.json()['access_token']}"}
    assert client.get("/users/me", headers=new_headers).status_code == 200
    login("new@example.com", "Changed123!")


def test_validate_token_refreshes_it(client, make_user, login) -> None:
    make_user(email="student@example.com")
    headers = login("student@example.com")

    response = client.get("/auth/token/validate", headers=headers)

    assert response.status_code == 200
    assert response.json()["access_token"] == response.headers["x-refreshed-token"]
    assert response.json()["role"] == "student"


def test_garbage_token_is_rejected(client) -> None:
    response = client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
