"""Tests for transactional emails, rate limiting and unsubscribe links."""

from __future__ import annotations

import pytest

from bizmodel_app.extensions import db
from bizmodel_app.models import EmailLog, RetryJob, User
from bizmodel_app.services import email_service, mail_service, quiz_service, report_access_service, retry_queue
from bizmodel_app.services.email_service import EmailRateLimiter

SESSION = {"X-Session-ID": "mail-session"}


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture()
def attempt(app_with_db, quiz_answers):
    return quiz_service.create_quiz_attempt_with_access(quiz_answers, session_id="mail-session")


def test_rate_limiter_cooldowns():
    clock = FakeClock()
    limiter = EmailRateLimiter(cooldown=60, extended_cooldown=300, initial_limit=1, clock=clock)

    assert limiter.check("a@example.com") == (True, None)
    allowed, info = limiter.check("A@example.com ")
    assert allowed is False
    assert info == {"remaining_seconds": 60, "type": "cooldown"}

    clock.now += 61
    assert limiter.check("a@example.com")[0] is True
    clock.now += 61
    allowed, info = limiter.check("a@example.com")
    assert allowed is False
    assert info["type"] == "extended"
    assert info["remaining_seconds"] == 239

    clock.now += 240
    assert limiter.check("a@example.com")[0] is True
    assert limiter.check("b@example.com")[0] is True


def test_rate_limiter_cleanup_and_reset():
    clock = FakeClock()
    limiter = EmailRateLimiter(cooldown=60, extended_cooldown=300, initial_limit=5, clock=clock)
    limiter.check("old@example.com")
    clock.now += 3601
    limiter.check("new@example.com")
    assert limiter.cleanup() == 1
    limiter.reset()
    assert limiter.check("new@example.com") == (True, None)


def test_quiz_results_email(client, attempt):
    resp = client.post(
        "/api/email/quiz-results",
        json={"quiz_attempt_id": attempt.id, "email": "reader@example.com"},
        headers=SESSION,
    )
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "skipped"
    log = EmailLog.query.filter_by(recipient="reader@example.com").one()
    assert log.email_type == "quiz_results"
    assert log.quiz_attempt_id == attempt.id


def test_quiz_results_email_rate_limited(client, attempt):
    payload = {"quiz_attempt_id": attempt.id, "email": "reader@example.com"}
    client.post("/api/email/quiz-results", json=payload, headers=SESSION)
    resp = client.post("/api/email/quiz-results", json=payload, headers=SESSION)
    assert resp.status_code == 429
    body = resp.get_json()
    assert body["error"] == "rate_limited"
    assert body["rate_limit"]["type"] == "cooldown"
    assert EmailLog.query.filter_by(status="rate_limited").count() == 1


def test_quiz_results_email_requires_visible_attempt(client, attempt):
    resp = client.post(
        "/api/email/quiz-results",
        json={"quiz_attempt_id": attempt.id, "email": "reader@example.com"},
    )
    assert resp.status_code == 404


def test_full_report_email_locked(client, attempt):
    resp = client.post(
        "/api/email/full-report",
        json={"quiz_attempt_id": attempt.id, "email": "reader@example.com"},
        headers=SESSION,
    )
    assert resp.status_code == 402


def test_full_report_email_renders_report(app_with_db, monkeypatch, attempt):
    sent = {}

    def _send(**kwargs):
        sent.update(kwargs)
        return "<msg-1@bizmodelai.com>"

    monkeypatch.setattr(mail_service, "send_email", _send)
    report_access_service.update_paid_status(attempt.id, True)
    result = email_service.send_full_report(attempt, "reader@example.com")
    assert result == {"status": "sent", "message_id": "<msg-1@bizmodelai.com>"}
    assert "All matches:" in sent["text"]
    assert sent["unsubscribe_url"].startswith("https://bizmodelai.com/unsubscribe?token=")
    assert sent["headers"] == {"X-Mail-Template": "full_report"}


def test_unsubscribed_users_skip_marketing(app_with_db, attempt):
    user = User(email="quiet@example.com", is_unsubscribed=True)
    db.session.add(user)
    db.session.commit()
    result = email_service.send_quiz_results(attempt, "quiet@example.com")
    assert result == {"status": "skipped", "reason": "unsubscribed"}


def test_unsubscribe_endpoint(client, user_token):
    token = email_service.make_unsubscribe_token("founder@example.com")
    resp = client.post("/api/email/unsubscribe", json={"token": token})
    assert resp.status_code == 200
    assert resp.get_json() == {"unsubscribed": True}
    assert User.query.filter_by(email="founder@example.com").one().is_unsubscribed is True


def test_unsubscribe_unknown_address(client):
    token = email_service.make_unsubscribe_token("ghost@example.com")
    resp = client.post("/api/email/unsubscribe", json={"token": token})
    assert resp.get_json() == {"unsubscribed": False}


def test_unsubscribe_rejects_tampered_token(client):
    token = email_service.make_unsubscribe_token("founder@example.com")
    resp = client.post("/api/email/unsubscribe", json={"token": token[:-2] + "xx"})
    assert resp.status_code == 400


def test_contact_form(app_with_db, client):
    resp = client.post(
        "/api/email/contact",
        json={
            "name": "Jordan",
            "email": "jordan@example.com",
            "subject": "Partnership",
            "message": "Let's talk.",
            "category": "partnership",
        },
    )
    assert resp.status_code == 202
    data = resp.get_json()
    assert data["notification"]["status"] == "skipped"
    assert data["confirmation"]["status"] == "skipped"
    inbox = app_with_db.config["CONTACT_INBOX"]
    notification = EmailLog.query.filter_by(email_type="contact_notification").one()
    assert notification.recipient == inbox
    assert notification.subject == "New Contact Form: Partnership"
    assert EmailLog.query.filter_by(email_type="contact_confirmation").one().recipient == "jordan@example.com"


def test_contact_form_validation(client):
    resp = client.post("/api/email/contact", json={"name": "", "email": "bad", "subject": "x", "message": "y"})
    assert resp.status_code == 400
    errors = resp.get_json()["errors"]
    assert "email" in errors and "name" in errors


def test_failed_delivery_is_queued_and_retried(app_with_db, monkeypatch, attempt):
    def _down(**kwargs):
        raise mail_service.MailServiceError("smtp down")

    monkeypatch.setattr(mail_service, "send_email", _down)
    result = email_service.send_quiz_results(attempt, "reader@example.com")
    assert result == {"status": "queued"}
    job = RetryJob.query.one()
    assert job.kind == "email"
    assert job.payload["to"] == "reader@example.com"
    assert job.last_error == "smtp down"

    monkeypatch.setattr(mail_service, "send_email", lambda **kwargs: "<msg-2@bizmodelai.com>")
    counts = retry_queue.process_queue()
    assert counts["succeeded"] == 1
    assert retry_queue.queue_size() == 0
    statuses = [log.status for log in EmailLog.query.order_by(EmailLog.id).all()]
    assert statuses == ["queued", "sent"]
