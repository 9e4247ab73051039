"""Persisted business-model scores per quiz attempt.

Scores are calculated once per attempt and stored, so later reads (reports,
emails, the dashboard) always show the same ranking even if the catalog
changes afterwards.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from flask import current_app

from ..extensions import db
from ..models import BusinessModelScore, QuizAttempt, User
from ..utils.clock import utcnow
from .scoring_service import calculate_all_business_model_matches


def calculate_and_store_scores(attempt: QuizAttempt, *, commit: bool = True) -> List[BusinessModelScore]:
    """Return stored scores for the attempt, calculating them on first use."""

    existing = get_stored_scores(attempt.id)
    if existing:
        return existing

    matches = calculate_all_business_model_matches(attempt.quiz_data or {})
    rows = [
        BusinessModelScore(
            quiz_attempt_id=attempt.id,
            business_model_id=match.id,
            business_model_name=match.name,
            score=match.score,
            category=match.category,
            fit_score=match.fit_score,
            rank=position,
        )
        for position, match in enumerate(matches, start=1)
    ]
    db.session.add_all(rows)
    if commit:
        db.session.commit()
    else:
        db.session.flush()
    current_app.logger.info(
        "Stored %s business model scores for quiz attempt %s", len(rows), attempt.id
    )
    return rows


def get_stored_scores(attempt_id: int) -> List[BusinessModelScore]:
    return (
        BusinessModelScore.query.filter_by(quiz_attempt_id=attempt_id)
        .order_by(BusinessModelScore.score.desc(), BusinessModelScore.rank.asc())
        .all()
    )


def get_stored_scores_by_email(email: str) -> List[BusinessModelScore]:
    user = User.query.filter_by(email=(email or "").strip().lower()).first()
    if user is None:
        return []
    latest = (
        QuizAttempt.query.filter_by(user_id=user.id)
        .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
        .first()
    )
    if latest is None:
        return []
    return get_stored_scores(latest.id)


def _expired_attempt_ids(now: datetime) -> List[int]:
    return [
        attempt_id
        for (attempt_id,) in db.session.query(QuizAttempt.id).filter(
            QuizAttempt.is_paid.is_(False),
            QuizAttempt.expires_at.isnot(None),
            QuizAttempt.expires_at < now,
        )
    ]


def count_expired_scores(now: datetime | None = None) -> int:
    expired_ids = _expired_attempt_ids(now or utcnow())
    if not expired_ids:
        return 0
    return BusinessModelScore.query.filter(BusinessModelScore.quiz_attempt_id.in_(expired_ids)).count()


def cleanup_expired_scores(now: datetime | None = None, *, commit: bool = True) -> int:
    """Delete scores of unpaid attempts whose retention window has passed."""

    expired_ids = _expired_attempt_ids(now or utcnow())
    if not expired_ids:
        return 0
    deleted = BusinessModelScore.query.filter(
        BusinessModelScore.quiz_attempt_id.in_(expired_ids)
    ).delete(synchronize_session=False)
    if commit:
        db.session.commit()
    current_app.logger.info("Deleted %s expired business model scores", deleted)
    return deleted


