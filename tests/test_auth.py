# tests/test_auth.py

"""
Tests for authentication endpoints.
"""

from fastapi.testclient import TestClient


def test_login_success(client: TestClient, make_admin):
    make_admin(email="sara@example.com", password="secret123", role="Super", name="Sara")

    response = client.post(
        "/auth/login",
        json={"email": "Sara@Example.com", "password": "secret123"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "super"
    assert data["name"] == "Sara"
    assert data["access_token"]
    assert data["token_type"] == "bearer"


def test_login_wrong_password(client: TestClient, make_admin):
    make_admin(email="sara@example.com", password="secret123")

    response = client.post(
        "/auth/login",
        json={"email": "sara@example.com", "password": "wrongpassword"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect password."


def test_login_unknown_admin(client: TestClient):
    response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Access denied. Admin account not found."


def test_login_inactive_admin(client: TestClient, make_admin, credential_store):
    make_admin(email="gone@example.com", password="secret123", status="inactive")

    response = client.post("/auth/login", json={"email": "gone@example.com", "password": "secret123"})

    assert response.status_code == 401
    assert "inactive" in response.json()["detail"]
    assert credential_store.tokens == {}


def test_login_rate_limiting(client: TestClient, make_admin):
    make_admin(email="sara@example.com", password="secret123")

    for i in range(5):
        response = client.post("/auth/login", json={"email": "sara@example.com", "password": "bad"})
        assert response.status_code == 401

    response = client.post("/auth/login", json={"email": "sara@example.com", "password": "secret123"})
    assert response.status_code == 429


def test_me_and_logout(client: TestClient, super_context, auth_headers, credential_store):
    headers = auth_headers()

    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["user_id"] == super_context.user_id

    response = client.post("/auth/logout", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"active_item": "dashboard", "expanded_item": None}

    assert client.get("/auth/me", headers=headers).status_code == 401


def test_deactivated_admin_loses_access_on_next_request(client: TestClient, super_context, auth_headers, record_store):
    headers = auth_headers()
    record_store.update("admins", super_context.user_id, {"status": "suspended"})

    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 401


def test_me_requires_token(client: TestClient):
    assert client.get("/auth/me").status_code in (401, 403)


def test_password_reset_does_not_reveal_accounts(client: TestClient, make_admin, credential_store):
    make_admin(email="sara@example.com")

    known = client.post("/auth/password-reset", json={"email": "sara@example.com"})
    unknown = client.post("/auth/password-reset", json={"email": "stranger@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert credential_store.reset_emails == ["sara@example.com"]


def test_password_reset_rate_limiting(client: TestClient):
    for i in range(5):
        response = client.post("/auth/password-reset", json={"email": "test@example.com"})
        assert response.status_code == 200

    response = client.post("/auth/password-reset", json={"email": "test@example.com"})
    assert response.status_code == 429
