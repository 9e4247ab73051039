"""Tests for expired guest data cleanup."""

from __future__ import annotations

from datetime import timedelta

import pytest

from bizmodel_app.extensions import db
from bizmodel_app.models import BusinessModelScore, Payment, QuizAttempt, ReportAccess, User
from bizmodel_app.services import quiz_service, report_access_service, retention_service
from bizmodel_app.utils import hash_password, utcnow

from conftest import auth


@pytest.fixture()
def population(app_with_db, quiz_answers):
    """Guest, paid, temporary and registered data with different lifetimes."""

    guest = quiz_service.create_quiz_attempt_with_access(quiz_answers, session_id="guest")
    paid_guest = quiz_service.create_quiz_attempt_with_access(quiz_answers, session_id="paid")
    report_access_service.update_paid_status(paid_guest.id, True)

    temp = quiz_service.get_or_create_temporary_user("temp", "temp@example.com")
    temp_attempt = quiz_service.create_quiz_attempt_with_access(quiz_answers, user=temp, session_id="temp")

    buyer = quiz_service.get_or_create_temporary_user("buyer", "buyer@example.com")
    db.session.add(Payment(user_id=buyer.id, amount_cents=999, currency="usd", status="pending"))

    member = User(email="member@example.com", password_hash=hash_password("StrongPass123!"))
    db.session.add(member)
    db.session.commit()
    member_attempt = quiz_service.create_quiz_attempt_with_access(quiz_answers, user=member)

    return {
        "guest": guest.id,
        "paid_guest": paid_guest.id,
        "temp_user": temp.id,
        "temp_attempt": temp_attempt.id,
        "buyer": buyer.id,
        "member_attempt": member_attempt.id,
    }


def _far_future():
    return utcnow() + timedelta(days=100)


def test_nothing_expires_immediately(population):
    result = retention_service.cleanup_expired_data()
    assert result == {
        "attempts": 0,
        "temporary_users": 0,
        "relocked_reports": 0,
        "scores": 0,
        "dry_run": False,
    }
    assert QuizAttempt.query.count() == 4


def test_dry_run_reports_without_deleting(population):
    result = retention_service.cleanup_expired_data(now=_far_future(), dry_run=True)
    assert result == {
        "attempts": 2,
        "temporary_users": 1,
        "relocked_reports": 0,
        "scores": 52,
        "dry_run": True,
    }
    assert QuizAttempt.query.count() == 4
    assert User.query.count() == 3


def test_cleanup_removes_expired_guest_data(population):
    result = retention_service.cleanup_expired_data(now=_far_future())
    assert result["attempts"] == 2
    assert result["temporary_users"] == 1
    assert result["scores"] == 52

    remaining = {attempt.id for attempt in QuizAttempt.query.all()}
    assert remaining == {population["paid_guest"], population["member_attempt"]}
    assert db.session.get(User, population["temp_user"]) is None
    assert db.session.get(User, population["buyer"]) is not None
    assert BusinessModelScore.query.count() == 52
    assert ReportAccess.query.count() == 8


def test_cleanup_relocks_expired_unlocks(population):
    report_access_service.unlock_report(
        population["member_attempt"],
        report_access_service.FULL_REPORT,
        "promo",
        expires_at=utcnow() + timedelta(hours=1),
    )
    result = retention_service.cleanup_expired_data(now=utcnow() + timedelta(hours=2))
    assert result["relocked_reports"] == 1
    assert not report_access_service.is_report_unlocked(
        population["member_attempt"], report_access_service.FULL_REPORT
    )


def test_admin_cleanup_endpoint(client, admin_token, population):
    resp = client.post("/api/admin/cleanup?dry_run=true", headers=auth(admin_token))
    assert resp.status_code == 200
    assert resp.get_json()["dry_run"] is True
    assert client.post("/api/admin/cleanup", headers=auth(admin_token)).get_json()["attempts"] == 0
