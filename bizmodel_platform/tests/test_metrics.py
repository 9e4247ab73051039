"""Tests for logging/metrics hardening."""

from __future__ import annotations


def test_metrics_endpoint(client):
    client.get("/api/scoring/ping")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert b"bizmodel_requests_total" in resp.data
    assert b"bizmodel_retry_queue_size" in resp.data


def test_request_id_header(client):
    resp = client.get("/api/auth/ping")
    assert resp.status_code == 200
    assert "X-Request-ID" in resp.headers


def test_quiz_submission_counter(client, quiz_answers):
    client.post("/api/quiz/attempts", json={"quiz_data": quiz_answers})
    resp = client.get("/metrics")
    assert b'bizmodel_quiz_submissions_total{audience="guest"}' in resp.data
