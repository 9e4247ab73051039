"""Tests for report unlock flags and gated report content."""

from __future__ import annotations

from datetime import timedelta

import pytest
from werkzeug.exceptions import NotFound

from bizmodel_app.errors import ReportLocked
from bizmodel_app.extensions import db
from bizmodel_app.models import QuizAttempt, ReportAccess
from bizmodel_app.services import quiz_service, report_access_service as ras
from bizmodel_app.utils import utcnow

SESSION = {"X-Session-ID": "report-session"}


@pytest.fixture()
def attempt(app_with_db, quiz_answers):
    return quiz_service.create_quiz_attempt_with_access(quiz_answers, session_id="report-session")


def test_initial_access_only_unlocks_preview(attempt):
    assert ras.is_report_unlocked(attempt.id, ras.RESULTS_PREVIEW)
    for report_type in ras.PAID_REPORTS:
        assert not ras.is_report_unlocked(attempt.id, report_type)
    rows = ras.get_report_access(attempt.id)
    assert [row.report_type for row in rows] == sorted(ras.REPORT_TYPES)
    by_type = {row.report_type: row for row in rows}
    assert by_type[ras.RESULTS_PREVIEW].unlocked_by == "free"
    assert by_type[ras.FULL_REPORT].unlocked_by == "locked"


def test_initialize_is_idempotent(attempt):
    ras.initialize_report_access(attempt.id, is_paid=False)
    assert ReportAccess.query.filter_by(quiz_attempt_id=attempt.id).count() == 4


def test_missing_row_is_locked(app_with_db):
    assert ras.is_report_unlocked(12345, ras.RESULTS_PREVIEW) is False


def test_update_paid_status_unlocks_paid_reports(attempt):
    assert attempt.expires_at is not None
    ras.update_paid_status(attempt.id, True)
    refreshed = db.session.get(QuizAttempt, attempt.id)
    assert refreshed.is_paid is True
    assert refreshed.expires_at is None
    for report_type in ras.REPORT_TYPES:
        assert ras.is_report_unlocked(attempt.id, report_type)
    paid_rows = [row for row in ras.get_report_access(attempt.id) if row.report_type in ras.PAID_REPORTS]
    assert {row.unlocked_by for row in paid_rows} == {"paid"}


def test_update_paid_status_unknown_attempt(app_with_db):
    with pytest.raises(NotFound):
        ras.update_paid_status(999, True)


def test_unlock_report_with_expiry(attempt):
    past = utcnow() - timedelta(minutes=5)
    ras.unlock_report(attempt.id, ras.INCOME_PROJECTIONS, "promo", expires_at=past)
    assert ras.is_report_unlocked(attempt.id, ras.INCOME_PROJECTIONS) is False

    future = utcnow() + timedelta(days=1)
    ras.unlock_report(attempt.id, ras.INCOME_PROJECTIONS, "promo", expires_at=future)
    assert ras.is_report_unlocked(attempt.id, ras.INCOME_PROJECTIONS) is True
    assert ras.is_report_unlocked(
        attempt.id, ras.INCOME_PROJECTIONS, now=future + timedelta(seconds=1)
    ) is False


def test_unlock_unknown_report_type(attempt):
    with pytest.raises(NotFound):
        ras.unlock_report(attempt.id, "crystal-ball", "admin")


def test_cleanup_expired_unlocks_relocks(attempt):
    ras.unlock_report(attempt.id, ras.FULL_REPORT, "promo", expires_at=utcnow() + timedelta(hours=1))
    assert ras.cleanup_expired_unlocks() == 0
    later = utcnow() + timedelta(hours=2)
    assert ras.cleanup_expired_unlocks(later) == 1
    row = ReportAccess.query.filter_by(quiz_attempt_id=attempt.id, report_type=ras.FULL_REPORT).one()
    assert row.is_unlocked is False


def test_unlock_stats(attempt):
    stats = ras.get_unlock_stats()
    assert stats[ras.RESULTS_PREVIEW] == {"locked": 0, "unlocked": 1}
    assert stats[ras.FULL_REPORT] == {"locked": 1, "unlocked": 0}


def test_personal_snapshot_lines(quiz_answers):
    lines = ras.personal_snapshot(quiz_answers)
    assert len(lines) == 6
    assert "Prefer flexibility with structure" in lines
    assert "Thrive on independent projects" in lines
    assert "Are motivated by financial freedom" in lines
    assert "Learn best by doing" in lines
    assert "Confident with technology and new tools" in lines
    assert "Highly self-motivated and consistent" in lines


def test_personal_snapshot_structure_preference(quiz_answers):
    clear = ras.personal_snapshot(dict(quiz_answers, work_structure_preference="clear-steps"))
    assert "Prefer clear structure and routines" in clear
    assert "Prefer flexibility with structure" not in clear


def test_build_report_locked(attempt):
    with pytest.raises(ReportLocked) as excinfo:
        ras.build_report(attempt, ras.FULL_REPORT)
    assert excinfo.value.to_dict()["report_type"] == ras.FULL_REPORT


def test_access_endpoint(client, attempt):
    resp = client.get(f"/api/reports/{attempt.id}/access", headers=SESSION)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["is_paid"] is False
    assert {row["report_type"]: row["is_unlocked"] for row in data["access"]}[ras.RESULTS_PREVIEW] is True


def test_access_endpoint_hidden_from_strangers(client, attempt):
    assert client.get(f"/api/reports/{attempt.id}/access").status_code == 404


def test_preview_report_endpoint(client, attempt):
    resp = client.get(f"/api/reports/{attempt.id}/results-preview", headers=SESSION)
    assert resp.status_code == 200
    report = resp.get_json()["report"]
    assert len(report["top_matches"]) == 3
    assert len(report["personal_snapshot"]) == 6
    assert "matches" not in report


def test_locked_report_returns_payment_required(client, attempt):
    resp = client.get(f"/api/reports/{attempt.id}/full-report", headers=SESSION)
    assert resp.status_code == 402
    body = resp.get_json()
    assert body["error"] == "report_locked"
    assert body["quiz_attempt_id"] == attempt.id


def test_unknown_report_type_endpoint(client, attempt):
    assert client.get(f"/api/reports/{attempt.id}/crystal-ball", headers=SESSION).status_code == 404


def test_full_report_after_payment(client, attempt):
    ras.update_paid_status(attempt.id, True)
    resp = client.get(f"/api/reports/{attempt.id}/full-report", headers=SESSION)
    assert resp.status_code == 200
    report = resp.get_json()["report"]
    assert len(report["matches"]) == 26
    assert len(report["top_models"]) == 3
    assert report["bottom_matches"][0] == report["matches"][-1]
    assert sum(report["score_distribution"].values()) == 26
    assert len(report["personality"]["scores"]) == 12
    assert report["ai_content"] == {}


def test_income_projections_report(client, attempt):
    ras.update_paid_status(attempt.id, True)
    resp = client.get(f"/api/reports/{attempt.id}/income-projections", headers=SESSION)
    assert resp.status_code == 200
    projections = resp.get_json()["report"]["projections"]
    assert len(projections) == 3
    assert set(projections[0]["income_bands"]) == {"beginner", "intermediate", "advanced"}


def test_pdf_download_as_html(client, attempt):
    ras.update_paid_status(attempt.id, True)
    resp = client.get(f"/api/reports/{attempt.id}/pdf-download?format=html", headers=SESSION)
    assert resp.status_code == 200
    assert resp.mimetype == "text/html"
    assert b"Your Business Report" in resp.data
    assert f"bizmodelai-report-{attempt.id}.html" in resp.headers["Content-Disposition"]
