from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from neighborly.app import app

client = TestClient(app)


def _login_user(c):
    c.post("/auth/login", json={"email": "user@neighborly.local", "password": "user123"})


def _login_admin(c):
    c.post("/auth/login", json={"email": "admin@neighborly.local", "password": "admin123"})


# ── Signup ───────────────────────────────────────────────────────────────


def test_signup_then_login():
    c = TestClient(app)
    email = f"{uuid.uuid4().hex[:8]}@example.com"
    resp = c.post("/auth/signup", json={"email": email, "password": "s3cret!", "name": "Sam"})
    assert resp.status_code == 201
    assert resp.json()["user"]["role"] == "user"

    resp = c.post("/auth/login", json={"email": email.upper(), "password": "s3cret!"})
    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Sam"


def test_signup_duplicate_email():
    resp = client.post("/auth/signup", json={
        "email": "user@neighborly.local", "password": "another1",
    })
    assert resp.status_code == 409


def test_signup_validation_rejects_short_password():
    resp = client.post("/auth/signup", json={"email": "short@example.com", "password": "123"})
    assert resp.status_code == 422


# ── Login / Logout ───────────────────────────────────────────────────────


def test_login_success_user():
    resp = client.post("/auth/login", json={"email": "user@neighborly.local", "password": "user123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["user"]["email"] == "user@neighborly.local"
    assert body["user"]["role"] == "user"
    assert "password_hash" not in body["user"]


def test_login_success_admin():
    resp = client.post("/auth/login", json={"email": "admin@neighborly.local", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "admin"


def test_login_wrong_password():
    resp = client.post("/auth/login", json={"email": "user@neighborly.local", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_user():
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_auth_me_when_logged_in():
    _login_user(client)
    resp = client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["email"] == "user@neighborly.local"


def test_auth_me_not_logged_in():
    c = TestClient(app)  # fresh client, no session
    resp = c.get("/auth/me")
    assert resp.status_code == 401


def test_logout():
    _login_user(client)
    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] == "logged_out"
    # Session should be cleared
    resp = client.get("/auth/me")
    assert resp.status_code == 401


# ── Route protection ─────────────────────────────────────────────────────


def test_analytics_requires_admin():
    _login_user(client)
    resp = client.get("/analytics")
    assert resp.status_code == 403


def test_analytics_allowed_for_admin():
    _login_admin(client)
    resp = client.get("/analytics")
    assert resp.status_code == 200


def test_snapshot_requires_admin():
    c = TestClient(app)
    _login_user(c)
    resp = c.post("/analytics/snapshot")
    assert resp.status_code == 403


# ── Public endpoints stay public ─────────────────────────────────────────


def test_health_is_public():
    c = TestClient(app)
    assert c.get("/health").status_code == 200


def test_catalog_endpoints_are_public():
    c = TestClient(app)
    assert c.get("/neighborhoods").status_code == 200
    assert c.get("/stats").status_code == 200
    assert c.get("/data/quality").status_code == 200
