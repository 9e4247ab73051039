"""Tests for quiz submission, ownership and stored scores."""

from __future__ import annotations

from datetime import timedelta

import pytest

from bizmodel_app.errors import AccountExists
from bizmodel_app.extensions import db
from bizmodel_app.models import BusinessModelScore, QuizAttempt, ReportAccess, User
from bizmodel_app.services import quiz_service, score_store
from bizmodel_app.utils import coerce_aware, utcnow

from conftest import auth


def _submit(client, answers, **kwargs):
    headers = kwargs.pop("headers", {})
    resp = client.post("/api/quiz/attempts", json={"quiz_data": answers, **kwargs}, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def test_guest_submission_stores_scores_and_access(client, quiz_answers):
    data = _submit(client, quiz_answers, headers={"X-Session-ID": "guest-1"})
    attempt = data["attempt"]
    assert attempt["user_id"] is None
    assert attempt["session_id"] == "guest-1"
    assert attempt["is_paid"] is False
    assert attempt["expires_at"] is not None
    assert len(data["matches"]) == 26
    assert data["report_access"] == {
        "full-report": False,
        "income-projections": False,
        "pdf-download": False,
        "results-preview": True,
    }
    assert BusinessModelScore.query.filter_by(quiz_attempt_id=attempt["id"]).count() == 26
    assert ReportAccess.query.filter_by(quiz_attempt_id=attempt["id"]).count() == 4


def test_guest_attempt_expires_after_ttl(app_with_db, client, quiz_answers):
    before = utcnow()
    data = _submit(client, quiz_answers)
    attempt = db.session.get(QuizAttempt, data["attempt"]["id"])
    ttl = timedelta(hours=app_with_db.config["GUEST_ATTEMPT_TTL_HOURS"])
    expires_at = coerce_aware(attempt.expires_at)
    assert before + ttl <= expires_at <= utcnow() + ttl


def test_email_submission_creates_temporary_user(app_with_db, client, quiz_answers):
    data = _submit(client, quiz_answers, email="Temp@Example.com", first_name="Tess")
    user = User.query.filter_by(email="temp@example.com").one()
    assert user.is_temporary is True
    assert user.first_name == "Tess"
    assert data["attempt"]["user_id"] == user.id
    attempt = db.session.get(QuizAttempt, data["attempt"]["id"])
    ttl = timedelta(days=app_with_db.config["TEMP_USER_TTL_DAYS"])
    assert coerce_aware(attempt.expires_at) > utcnow() + ttl - timedelta(minutes=1)


def test_repeat_email_reuses_temporary_user(client, quiz_answers):
    _submit(client, quiz_answers, email="again@example.com")
    _submit(client, quiz_answers, email="again@example.com")
    assert User.query.filter_by(email="again@example.com").count() == 1
    user = User.query.filter_by(email="again@example.com").one()
    assert len(user.quiz_attempts) == 2


def test_registered_user_attempt_never_expires(client, user_token, quiz_answers):
    data = _submit(client, quiz_answers, headers=auth(user_token))
    assert data["attempt"]["expires_at"] is None
    listing = client.get("/api/quiz/attempts", headers=auth(user_token))
    assert listing.status_code == 200
    assert [item["id"] for item in listing.get_json()["attempts"]] == [data["attempt"]["id"]]


def test_paid_user_new_attempt_starts_locked(client, user_token, quiz_answers):
    user = User.query.filter_by(email="founder@example.com").one()
    user.is_paid = True
    db.session.commit()
    data = _submit(client, quiz_answers, headers=auth(user_token))
    assert data["attempt"]["is_paid"] is False
    assert data["report_access"] == {
        "full-report": False,
        "income-projections": False,
        "pdf-download": False,
        "results-preview": True,
    }


def test_guest_cannot_submit_under_registered_email(client, user_token, quiz_answers):
    user = User.query.filter_by(email="founder@example.com").one()
    user.is_paid = True
    db.session.commit()
    guest = {"X-Session-ID": "stranger-session"}

    resp = client.post(
        "/api/quiz/attempts",
        json={"quiz_data": quiz_answers, "email": "Founder@Example.com"},
        headers=guest,
    )
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "login_required"
    assert QuizAttempt.query.count() == 0

    guest_attempt = _submit(client, quiz_answers, headers=guest)["attempt"]["id"]
    assert client.get(f"/api/reports/{guest_attempt}/full-report", headers=guest).status_code == 402


def test_guest_submission_stays_out_of_owner_history(client, user_token, quiz_answers):
    own = _submit(client, quiz_answers, headers=auth(user_token))
    client.post(
        "/api/quiz/attempts",
        json={"quiz_data": {"physical_shipping_openness": "no"}, "email": "founder@example.com"},
        headers={"X-Session-ID": "stranger-session"},
    )

    listing = client.get("/api/quiz/attempts", headers=auth(user_token)).get_json()["attempts"]
    assert [item["id"] for item in listing] == [own["attempt"]["id"]]
    latest = client.get("/api/quiz/latest-scores", headers=auth(user_token)).get_json()["matches"]
    assert latest == own["matches"]


def test_temporary_lookup_rejects_registered_account(app_with_db, user_token):
    with pytest.raises(AccountExists):
        quiz_service.get_or_create_temporary_user("s", "founder@example.com")


def test_attempt_visibility(client, user_token, quiz_answers):
    guest = _submit(client, quiz_answers, headers={"X-Session-ID": "owner-session"})
    attempt_id = guest["attempt"]["id"]

    assert client.get(f"/api/quiz/attempts/{attempt_id}").status_code == 404
    assert (
        client.get(f"/api/quiz/attempts/{attempt_id}", headers={"X-Session-ID": "other"}).status_code
        == 404
    )
    assert client.get(f"/api/quiz/attempts/{attempt_id}", headers=auth(user_token)).status_code == 404
    resp = client.get(f"/api/quiz/attempts/{attempt_id}", headers={"X-Session-ID": "owner-session"})
    assert resp.status_code == 200
    assert resp.get_json()["attempt"]["quiz_data"]["main_motivation"] == "financial-freedom"


def test_admin_sees_any_attempt(client, admin_token, quiz_answers):
    guest = _submit(client, quiz_answers, headers={"X-Session-ID": "s"})
    resp = client.get(f"/api/quiz/attempts/{guest['attempt']['id']}", headers=auth(admin_token))
    assert resp.status_code == 200


def test_missing_attempt_returns_404(client, admin_token):
    assert client.get("/api/quiz/attempts/999", headers=auth(admin_token)).status_code == 404


def test_attempt_scores_endpoint_matches_stored_order(client, quiz_answers):
    data = _submit(client, quiz_answers, headers={"X-Session-ID": "s1"})
    resp = client.get(f"/api/quiz/attempts/{data['attempt']['id']}/scores", headers={"X-Session-ID": "s1"})
    assert resp.status_code == 200
    assert resp.get_json()["matches"] == data["matches"]


def test_latest_scores_uses_most_recent_attempt(client, user_token, quiz_answers):
    _submit(client, quiz_answers, headers=auth(user_token))
    changed = dict(quiz_answers, physical_shipping_openness="yes", upfront_investment=5000)
    latest = _submit(client, changed, headers=auth(user_token))
    resp = client.get("/api/quiz/latest-scores", headers=auth(user_token))
    assert resp.status_code == 200
    assert resp.get_json()["matches"] == latest["matches"]


def test_submission_requires_answers(client):
    resp = client.post("/api/quiz/attempts", json={"quiz_data": {}})
    assert resp.status_code == 400
    resp = client.post("/api/quiz/attempts", json={})
    assert resp.status_code == 400
    assert "quiz_data" in resp.get_json()["errors"]


def test_calculate_and_store_scores_is_idempotent(app_with_db, quiz_answers):
    attempt = quiz_service.create_quiz_attempt_with_access(quiz_answers)
    first = [(row.business_model_id, row.score) for row in score_store.get_stored_scores(attempt.id)]
    again = score_store.calculate_and_store_scores(attempt)
    assert [(row.business_model_id, row.score) for row in again] == first
    assert BusinessModelScore.query.filter_by(quiz_attempt_id=attempt.id).count() == 26


def test_scoring_failure_still_saves_attempt(app_with_db, monkeypatch, quiz_answers):
    def _boom(*args, **kwargs):
        raise ValueError("scoring exploded")

    monkeypatch.setattr(score_store, "calculate_all_business_model_matches", _boom)
    attempt = quiz_service.create_quiz_attempt_with_access(quiz_answers, session_id="s")
    assert db.session.get(QuizAttempt, attempt.id) is not None
    assert BusinessModelScore.query.filter_by(quiz_attempt_id=attempt.id).count() == 0
    assert ReportAccess.query.filter_by(quiz_attempt_id=attempt.id).count() == 4

    monkeypatch.undo()
    assert len(score_store.calculate_and_store_scores(attempt)) == 26


def test_scores_by_unknown_email_are_empty(app_with_db):
    assert score_store.get_stored_scores_by_email("nobody@example.com") == []


@pytest.mark.parametrize("expired_hours, expected", [(1, 1), (-1, 0)])
def test_cleanup_expired_scores(app_with_db, quiz_answers, expired_hours, expected):
    attempt = quiz_service.create_quiz_attempt_with_access(quiz_answers)
    now = coerce_aware(attempt.expires_at) + timedelta(hours=expired_hours)
    assert score_store.count_expired_scores(now) == 26 * expected
    assert score_store.cleanup_expired_scores(now) == 26 * expected
