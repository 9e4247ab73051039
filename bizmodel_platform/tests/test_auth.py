"""Tests for the auth blueprint."""

from __future__ import annotations

from datetime import timedelta

from bizmodel_app.extensions import db
from bizmodel_app.models import EmailLog, User
from bizmodel_app.utils import utcnow

from conftest import auth


def test_register_creates_user(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "Founder@Example.com", "password": "StrongPass123!", "first_name": "Ada"},
    )
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["access_token"]
    assert data["user"]["email"] == "founder@example.com"
    assert data["user"]["is_temporary"] is False
    assert data["user"]["role"] == "user"


def test_register_logs_welcome_email(client):
    client.post("/api/auth/register", json={"email": "welcome@example.com", "password": "StrongPass123!"})
    log = EmailLog.query.filter_by(recipient="welcome@example.com").one()
    assert log.email_type == "welcome"
    # Mail is disabled in tests so nothing leaves the process.
    assert log.status == "skipped"


def test_register_duplicate_email_returns_conflict(client):
    payload = {"email": "dup@example.com", "password": "StrongPass123!"}
    client.post("/api/auth/register", json=payload)
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 409
    assert resp.get_json()["message"] == "Email already registered"


def test_register_converts_temporary_user(client, quiz_answers):
    submit = client.post(
        "/api/quiz/attempts",
        json={"quiz_data": quiz_answers, "email": "guest@example.com"},
        headers={"X-Session-ID": "sess-1"},
    )
    assert submit.status_code == 201
    attempt_id = submit.get_json()["attempt"]["id"]

    resp = client.post(
        "/api/auth/register",
        json={"email": "guest@example.com", "password": "StrongPass123!", "last_name": "Lovelace"},
    )
    assert resp.status_code == 201
    user = User.query.filter_by(email="guest@example.com").one()
    assert user.is_temporary is False
    assert user.last_name == "Lovelace"
    assert [attempt.id for attempt in user.quiz_attempts] == [attempt_id]
    assert user.quiz_attempts[0].expires_at is None


def test_register_rejects_short_password(client):
    resp = client.post("/api/auth/register", json={"email": "short@example.com", "password": "abc"})
    assert resp.status_code == 400
    assert "password" in resp.get_json()["errors"]


def test_login_returns_token(client, user_token):
    resp = client.post(
        "/api/auth/login",
        json={"email": "founder@example.com", "password": "StrongPass123!"},
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert "access_token" in data
    assert data["user"]["email"] == "founder@example.com"


def test_login_invalid_credentials(client):
    resp = client.post(
        "/api/auth/login",
        json={"email": "missing@example.com", "password": "nope"},
    )
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid email or password"


def test_temporary_user_cannot_login(client, quiz_answers):
    client.post("/api/quiz/attempts", json={"quiz_data": quiz_answers, "email": "temp@example.com"})
    resp = client.post("/api/auth/login", json={"email": "temp@example.com", "password": "whatever1"})
    assert resp.status_code == 401


def test_me_and_update_profile(client, user_token):
    resp = client.get("/api/auth/me", headers=auth(user_token))
    assert resp.status_code == 200
    assert resp.get_json()["user"]["first_name"] == "Sam"

    resp = client.patch("/api/auth/me", json={"last_name": "Rivera"}, headers=auth(user_token))
    assert resp.status_code == 200
    assert resp.get_json()["user"]["last_name"] == "Rivera"

    resp = client.patch("/api/auth/me", json={}, headers=auth(user_token))
    assert resp.status_code == 400


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401


def test_change_password(client, user_token):
    resp = client.post(
        "/api/auth/password",
        json={"current_password": "wrong-password", "new_password": "NewPass12345"},
        headers=auth(user_token),
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/auth/password",
        json={"current_password": "StrongPass123!", "new_password": "NewPass12345"},
        headers=auth(user_token),
    )
    assert resp.status_code == 200
    login = client.post("/api/auth/login", json={"email": "founder@example.com", "password": "NewPass12345"})
    assert login.status_code == 200


def test_password_reset_flow(client, user_token):
    resp = client.post("/api/auth/password/forgot", json={"email": "founder@example.com"})
    assert resp.status_code == 200
    user = User.query.filter_by(email="founder@example.com").one()
    token = user.password_reset_token
    assert token
    assert EmailLog.query.filter_by(email_type="password_reset").count() == 1

    resp = client.post("/api/auth/password/reset", json={"token": token, "new_password": "ResetPass123"})
    assert resp.status_code == 200
    login = client.post("/api/auth/login", json={"email": "founder@example.com", "password": "ResetPass123"})
    assert login.status_code == 200

    reused = client.post("/api/auth/password/reset", json={"token": token, "new_password": "Another12345"})
    assert reused.status_code == 400
    assert reused.get_json()["message"] == "reset_token_invalid"


def test_password_reset_unknown_email_is_silent(client):
    resp = client.post("/api/auth/password/forgot", json={"email": "nobody@example.com"})
    assert resp.status_code == 200
    assert EmailLog.query.filter_by(email_type="password_reset").count() == 0


def test_password_reset_rejects_rapid_repeat(client, user_token):
    client.post("/api/auth/password/forgot", json={"email": "founder@example.com"})
    resp = client.post("/api/auth/password/forgot", json={"email": "founder@example.com"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "reset_recent"


def test_password_reset_expired_token(client, user_token):
    client.post("/api/auth/password/forgot", json={"email": "founder@example.com"})
    user = User.query.filter_by(email="founder@example.com").one()
    user.password_reset_expires_at = utcnow() - timedelta(minutes=1)
    db.session.commit()
    resp = client.post(
        "/api/auth/password/reset",
        json={"token": user.password_reset_token, "new_password": "ResetPass123"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "reset_token_expired"
