"""Per-attempt report unlock flags and report assembly."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from flask import current_app, render_template
from sqlalchemy import func
from werkzeug.exceptions import NotFound

from ..errors import ReportLocked
from ..extensions import db
from ..models import AIContent, QuizAttempt, ReportAccess
from ..utils.clock import coerce_aware, utcnow
from . import business_catalog, personality_service, scoring_service, score_store

RESULTS_PREVIEW = "results-preview"
FULL_REPORT = "full-report"
PDF_DOWNLOAD = "pdf-download"
INCOME_PROJECTIONS = "income-projections"

REPORT_TYPES = (RESULTS_PREVIEW, FULL_REPORT, PDF_DOWNLOAD, INCOME_PROJECTIONS)
FREE_REPORTS = (RESULTS_PREVIEW,)
PAID_REPORTS = (FULL_REPORT, PDF_DOWNLOAD, INCOME_PROJECTIONS)


def _validate_type(report_type: str) -> None:
    if report_type not in REPORT_TYPES:
        raise NotFound(f"unknown report type: {report_type}")


def _get_row(attempt_id: int, report_type: str) -> ReportAccess | None:
    return ReportAccess.query.filter_by(
        quiz_attempt_id=attempt_id, report_type=report_type
    ).first()


def _upsert(
    attempt_id: int,
    report_type: str,
    *,
    is_unlocked: bool,
    unlocked_by: str,
    expires_at: datetime | None = None,
) -> ReportAccess:
    row = _get_row(attempt_id, report_type)
    if row is None:
        row = ReportAccess(quiz_attempt_id=attempt_id, report_type=report_type)
        db.session.add(row)
    row.is_unlocked = is_unlocked
    row.unlocked_by = unlocked_by
    row.unlocked_at = utcnow() if is_unlocked else None
    row.expires_at = expires_at
    return row


def initialize_report_access(attempt_id: int, is_paid: bool, *, commit: bool = True) -> List[ReportAccess]:
    """Create (or reset) one access row per report type for the attempt."""

    rows = []
    for report_type in REPORT_TYPES:
        if report_type in FREE_REPORTS:
            rows.append(_upsert(attempt_id, report_type, is_unlocked=True, unlocked_by="free"))
        else:
            rows.append(
                _upsert(
                    attempt_id,
                    report_type,
                    is_unlocked=is_paid,
                    unlocked_by="paid" if is_paid else "locked",
                )
            )
    if commit:
        db.session.commit()
    else:
        db.session.flush()
    return rows


def is_report_unlocked(attempt_id: int, report_type: str, *, now: datetime | None = None) -> bool:
    row = _get_row(attempt_id, report_type)
    if row is None:
        return False
    expires_at = coerce_aware(row.expires_at)
    if expires_at and expires_at < (now or utcnow()):
        return False
    return bool(row.is_unlocked)


def unlock_report(
    attempt_id: int,
    report_type: str,
    unlocked_by: str,
    expires_at: datetime | None = None,
    *,
    commit: bool = True,
) -> ReportAccess:
    _validate_type(report_type)
    row = _upsert(
        attempt_id,
        report_type,
        is_unlocked=True,
        unlocked_by=unlocked_by,
        expires_at=expires_at,
    )
    if commit:
        db.session.commit()
    return row


def get_report_access(attempt_id: int) -> List[ReportAccess]:
    return (
        ReportAccess.query.filter_by(quiz_attempt_id=attempt_id)
        .order_by(ReportAccess.report_type.asc())
        .all()
    )


def update_paid_status(attempt_id: int, is_paid: bool, *, commit: bool = True) -> QuizAttempt:
    attempt = db.session.get(QuizAttempt, attempt_id)
    if attempt is None:
        raise NotFound("quiz attempt not found")
    attempt.is_paid = is_paid
    if is_paid:
        # Paid attempts are kept indefinitely.
        attempt.expires_at = None
        for report_type in PAID_REPORTS:
            unlock_report(attempt_id, report_type, "paid", commit=False)
    if commit:
        db.session.commit()
    return attempt


def cleanup_expired_unlocks(now: datetime | None = None, *, commit: bool = True) -> int:
    now = now or utcnow()
    rows = ReportAccess.query.filter(
        ReportAccess.is_unlocked.is_(True),
        ReportAccess.expires_at.isnot(None),
        ReportAccess.expires_at < now,
    ).all()
    for row in rows:
        row.is_unlocked = False
        row.unlocked_at = None
    if rows:
        current_app.logger.info("Relocked %s expired report unlocks", len(rows))
    if commit:
        db.session.commit()
    return len(rows)


def get_unlock_stats() -> Dict[str, Dict[str, int]]:
    rows = (
        db.session.query(ReportAccess.report_type, ReportAccess.is_unlocked, func.count(ReportAccess.id))
        .group_by(ReportAccess.report_type, ReportAccess.is_unlocked)
        .all()
    )
    stats: Dict[str, Dict[str, int]] = {}
    for report_type, is_unlocked, count in rows:
        bucket = stats.setdefault(report_type, {"locked": 0, "unlocked": 0})
        bucket["unlocked" if is_unlocked else "locked"] = count
    return stats


def personal_snapshot(answers: dict) -> List[str]:
    """Short plain-language lines describing how the user likes to work."""

    lines = []
    structure = answers.get("work_structure_preference")
    if structure == "clear-steps":
        lines.append("Prefer clear structure and routines")
    elif structure == "some-structure":
        lines.append("Prefer flexibility with structure")
    else:
        lines.append("Comfortable with flexible or unstructured work")

    collaboration = answers.get("work_collaboration_preference")
    if collaboration in {"solo-only", "mostly-solo"}:
        lines.append("Thrive on independent projects")
    elif collaboration == "team-oriented":
        lines.append("Enjoy collaborating with others")
    else:
        lines.append("Open to both solo and team work")

    if answers.get("main_motivation") == "financial-freedom":
        lines.append("Are motivated by financial freedom")
    elif answers.get("main_motivation") == "creativity-passion" or (answers.get("passion_identity_alignment") or 0) >= 4:
        lines.append("Driven by passion and personal meaning")
    else:
        lines.append("Motivated by growth and new challenges")

    if answers.get("learning_preference") == "hands-on":
        lines.append("Learn best by doing")
    elif answers.get("learning_preference") == "reading":
        lines.append("Prefer to research before taking action")
    else:
        lines.append("Adapt learning style to the situation")

    tech = answers.get("tech_skills_rating") or 0
    if tech >= 4:
        lines.append("Confident with technology and new tools")
    elif tech == 3:
        lines.append("Comfortable with most digital tools")
    else:
        lines.append("Willing to learn new technology as needed")

    consistency = answers.get("long_term_consistency") or 0
    if consistency >= 4 or (answers.get("self_motivation_level") or 0) >= 4:
        lines.append("Highly self-motivated and consistent")
    elif consistency == 3:
        lines.append("Stay motivated with clear goals and support")
    else:
        lines.append("Working to build consistency and motivation")
    return lines


def _match_dicts(attempt: QuizAttempt) -> List[dict]:
    return [
        {
            "id": row.business_model_id,
            "name": row.business_model_name,
            "score": row.score,
            "category": row.category,
            "fit_score": row.fit_score,
        }
        for row in score_store.calculate_and_store_scores(attempt)
    ]


def _model_details(match: dict) -> dict:
    details = business_catalog.get_model(match["id"]).to_dict()
    details.update({"score": match["score"], "category": match["category"]})
    return details


def _cached_ai_content(attempt_id: int) -> Dict[str, object]:
    rows = AIContent.query.filter_by(quiz_attempt_id=attempt_id).all()
    return {row.content_type: row.content for row in rows}


def build_report(attempt: QuizAttempt, report_type: str) -> dict:
    """Assemble the content for a report, enforcing its unlock flag."""

    _validate_type(report_type)
    if not is_report_unlocked(attempt.id, report_type):
        raise ReportLocked(report_type, attempt.id)

    answers = attempt.quiz_data or {}
    matches = _match_dicts(attempt)
    top = matches[:3]
    report: dict = {
        "quiz_attempt_id": attempt.id,
        "report_type": report_type,
        "generated_at": utcnow().isoformat(),
    }

    if report_type == RESULTS_PREVIEW:
        report["top_matches"] = top
        report["personal_snapshot"] = personal_snapshot(answers)
        return report

    if report_type == INCOME_PROJECTIONS:
        report["projections"] = [
            {
                "id": match["id"],
                "name": match["name"],
                "score": match["score"],
                "potential_income": business_catalog.get_model(match["id"]).potential_income,
                "income_bands": business_catalog.get_model(match["id"]).to_dict()["average_income"],
            }
            for match in top
        ]
        return report

    personality = personality_service.calculate_personality_scores(answers)
    report.update(
        {
            "matches": matches,
            "top_models": [_model_details(match) for match in top],
            "bottom_matches": matches[-3:][::-1],
            "score_distribution": scoring_service.score_distribution(
                [scoring_service.ModelMatch(m["id"], m["name"], m["score"], m["category"]) for m in matches]
            ),
            "personality": {
                "scores": personality,
                "descriptions": personality_service.describe_personality(personality),
            },
            "personal_snapshot": personal_snapshot(answers),
            "ai_content": _cached_ai_content(attempt.id),
        }
    )
    if report_type == PDF_DOWNLOAD:
        report["html"] = render_template("reports/full_report.html", report=report)
    return report
