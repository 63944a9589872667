"""Tests for registration, the token endpoint and token invalidation."""

from __future__ import annotations

import pytest


def _login(client, email: str, password: str):
    return client.post(
        "/api/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )


def test_register_returns_a_usable_token(api):
    headers, user_id = api.register("Crew@EventLink.io", first_name="Robin")

    me = api.client.get("/api/users/me", headers=headers)

    assert me.status_code == 200
    assert me.json()["id"] == user_id
    assert me.json()["email"] == "crew@eventlink.io"
    assert me.json()["role"] == "freelancer"


@pytest.mark.parametrize(
    ("payload", "expected_status"),
    [
        ({"role": "admin"}, 400),
        ({"password": "short"}, 400),
        ({"email": "not-an-email"}, 422),
        ({"first_name": "  "}, 400),
    ],
)
def test_register_validation(client, payload, expected_status):
    body = {
        "email": "crew@eventlink.io",
        "password": "Secret123",
        "role": "freelancer",
        "first_name": "Robin",
        "last_name": "Crew",
    }
    body.update(payload)

    assert client.post("/api/auth/register", json=body).status_code == expected_status


def test_duplicate_email_is_rejected(api):
    api.register("crew@eventlink.io")

    response = api.client.post(
        "/api/auth/register",
        json={
            "email": "crew@eventlink.io",
            "password": "Secret123",
            "role": "recruiter",
            "first_name": "Other",
            "last_name": "Person",
        },
    )

    assert response.status_code == 400


def test_login_returns_bearer_token_and_role(api):
    api.register("recruiter@eventlink.io", role="recruiter")

    response = _login(api.client, "recruiter@eventlink.io", "Secret123")

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "recruiter"
    assert bool(payload["access_token"])


def test_login_with_wrong_password(api):
    api.register("crew@eventlink.io")

    response = _login(api.client, "crew@eventlink.io", "WrongPass1")

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


def test_allowlisted_email_is_treated_as_admin(api):
    headers, _ = api.register("boss@eventlink.io", role="recruiter")

    assert api.client.get("/api/users/me", headers=headers).json()["role"] == "admin"
    assert _login(api.client, "boss@eventlink.io", "Secret123").json()["role"] == "admin"
    assert api.client.get("/api/admin/stats", headers=headers).status_code == 200


def test_non_admins_cannot_reach_admin_endpoints(api):
    headers, _ = api.register("crew@eventlink.io")

    response = api.client.get("/api/admin/stats", headers=headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


def test_logout_invalidates_token(api):
    headers, _ = api.register("crew@eventlink.io")

    assert api.client.post("/api/auth/logout", headers=headers).status_code == 200

    me = api.client.get("/api/users/me", headers=headers)
    assert me.status_code == 401
    assert me.json()["detail"] == "Token has been invalidated"


def test_password_change_invalidates_existing_token(api):
    headers, _ = api.register("crew@eventlink.io")

    wrong = api.client.patch(
        "/api/users/me",
        json={"current_password": "nope", "new_password": "Another123"},
        headers=headers,
    )
    changed = api.client.patch(
        "/api/users/me",
        json={"current_password": "Secret123", "new_password": "Another123"},
        headers=headers,
    )

    assert wrong.status_code == 403
    assert changed.status_code == 200
    assert api.client.get("/api/users/me", headers=headers).status_code == 401
    assert _login(api.client, "crew@eventlink.io", "Another123").status_code == 200


def test_deleted_account_loses_access(api):
    headers, _ = api.register("crew@eventlink.io")

    assert api.client.delete("/api/users/me", headers=headers).status_code == 204

    me = api.client.get("/api/users/me", headers=headers)
    assert me.status_code == 401
    assert me.json()["detail"] == "User not found"
    assert _login(api.client, "crew@eventlink.io", "Secret123").status_code == 401
