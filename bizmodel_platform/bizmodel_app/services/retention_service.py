"""Removal of expired guest data."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict

from flask import current_app
from sqlalchemy import and_, exists, or_

from ..extensions import db
from ..models import Payment, QuizAttempt, ReportAccess, User
from ..utils.clock import utcnow
from . import report_access_service, score_store


def _expired_attempts(now: datetime):
    guest_cutoff = now - timedelta(hours=current_app.config.get("GUEST_ATTEMPT_TTL_HOURS", 24))
    return QuizAttempt.query.filter(
        QuizAttempt.is_paid.is_(False),
        or_(
            and_(QuizAttempt.expires_at.isnot(None), QuizAttempt.expires_at < now),
            and_(QuizAttempt.user_id.is_(None), QuizAttempt.completed_at < guest_cutoff),
        ),
    )


def _expired_temporary_users(now: datetime):
    has_payment = exists().where(Payment.user_id == User.id)
    return User.query.filter(
        User.is_temporary.is_(True),
        User.is_paid.is_(False),
        User.expires_at.isnot(None),
        User.expires_at < now,
        ~has_payment,
    )


def cleanup_expired_data(now: datetime | None = None, dry_run: bool = False) -> Dict[str, int]:
    """Delete expired unpaid attempts and temporary accounts.

    With ``dry_run`` nothing is changed and the counts describe what would be
    removed. Paid attempts and accounts with payments are always kept.
    """

    now = now or utcnow()
    attempts = _expired_attempts(now).all()
    users = _expired_temporary_users(now).all()
    user_attempts = sum(
        1 for user in users for attempt in user.quiz_attempts if attempt not in attempts and not attempt.is_paid
    )

    if dry_run:
        stale_unlocks = ReportAccess.query.filter(
            ReportAccess.is_unlocked.is_(True),
            ReportAccess.expires_at.isnot(None),
            ReportAccess.expires_at < now,
        ).count()
        return {
            "attempts": len(attempts) + user_attempts,
            "temporary_users": len(users),
            "relocked_reports": stale_unlocks,
            "scores": score_store.count_expired_scores(now),
            "dry_run": True,
        }

    relocked = report_access_service.cleanup_expired_unlocks(now, commit=False)
    scores = score_store.count_expired_scores(now)
    for attempt in attempts:
        # Scores, access rows and AI content cascade with the attempt.
        db.session.delete(attempt)
    for user in users:
        # Attempts cascade with the user.
        db.session.delete(user)
    db.session.commit()

    result = {
        "attempts": len(attempts) + user_attempts,
        "temporary_users": len(users),
        "relocked_reports": relocked,
        "scores": scores,
        "dry_run": False,
    }
    current_app.logger.info("Expired data cleanup finished", extra={"cleanup": result})
    return result
