"""Smoke tests for the Flask application factory."""

from __future__ import annotations

import pytest

from bizmodel_app import create_app

from conftest import auth


@pytest.fixture(scope="module")
def app():
    app = create_app("test")
    yield app


def test_app_creation(app):
    assert app is not None
    assert app.config["TESTING"] is True
    assert app.config["MAIL_ENABLED"] is False


@pytest.mark.parametrize(
    "endpoint",
    [
        "/api/auth/ping",
        "/api/scoring/ping",
        "/api/quiz/ping",
        "/api/reports/ping",
        "/api/payments/ping",
        "/api/ai/ping",
        "/api/email/ping",
    ],
)
def test_ping_endpoints(app, endpoint):
    client = app.test_client()
    response = client.get(endpoint)
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["status"] == "ok"


def test_admin_ping_requires_token(client):
    assert client.get("/api/admin/ping").status_code == 401


def test_admin_ping_rejects_regular_user(client, user_token):
    assert client.get("/api/admin/ping", headers=auth(user_token)).status_code == 403


def test_admin_ping_for_admin(client, admin_token):
    resp = client.get("/api/admin/ping", headers=auth(admin_token))
    assert resp.status_code == 200
    assert resp.get_json()["module"] == "admin"
