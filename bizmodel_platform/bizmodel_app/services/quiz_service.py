"""Quiz attempt lifecycle: creation, ownership and temporary accounts."""

from __future__ import annotations

from datetime import timedelta
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import AccountExists
from ..extensions import db
from ..metrics import record_quiz_submission
from ..models import QuizAttempt, User
from ..utils import hash_password, utcnow
from . import report_access_service, score_store


def _attempt_expiry(user: Optional[User]):
    now = utcnow()
    if user is None:
        return now + timedelta(hours=current_app.config.get("GUEST_ATTEMPT_TTL_HOURS", 24))
    if user.is_temporary:
        return now + timedelta(days=current_app.config.get("TEMP_USER_TTL_DAYS", 90))
    return None


def create_quiz_attempt_with_access(
    quiz_data: dict,
    user: Optional[User] = None,
    session_id: str | None = None,
    is_paid: bool = False,
) -> QuizAttempt:
    """Store a submission together with its report access rows and scores.

    The attempt, its access rows and its scores are committed together. If
    scoring fails the attempt is still saved; scores are then calculated
    lazily on first read.
    """

    is_paid = bool(is_paid)
    attempt = QuizAttempt(
        user_id=user.id if user else None,
        session_id=session_id,
        quiz_data=quiz_data,
        is_paid=is_paid,
        completed_at=utcnow(),
        expires_at=None if is_paid else _attempt_expiry(user),
    )
    try:
        db.session.add(attempt)
        db.session.flush()
        report_access_service.initialize_report_access(attempt.id, is_paid, commit=False)
        try:
            score_store.calculate_and_store_scores(attempt, commit=False)
        except (ValueError, KeyError, TypeError) as exc:
            current_app.logger.error(
                "Failed to store scores for quiz attempt %s: %s", attempt.id, exc
            )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    record_quiz_submission("guest" if user is None else ("temporary" if user.is_temporary else "user"))
    current_app.logger.info(
        "Quiz attempt stored",
        extra={"quiz_attempt_id": attempt.id, "user_id": attempt.user_id, "paid": is_paid},
    )
    return attempt


def get_or_create_temporary_user(
    session_id: str | None,
    email: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Return the temporary account for ``email``, creating one if needed.

    Raises:
        AccountExists: when ``email`` belongs to a registered account. Guests
            may not attach submissions to it without logging in.
    """

    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user:
        if not user.is_temporary:
            raise AccountExists(email)
        return user

    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        is_temporary=True,
        session_id=session_id,
        expires_at=utcnow() + timedelta(days=current_app.config.get("TEMP_USER_TTL_DAYS", 90)),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Another request created the same email first.
        db.session.rollback()
        existing = User.query.filter_by(email=email).first()
        if existing is None:
            raise
        if not existing.is_temporary:
            raise AccountExists(email) from None
        return existing
    current_app.logger.info("Created temporary user %s", user.id)
    return user


def convert_temporary_user(
    user: User,
    password: str | None = None,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    commit: bool = True,
) -> User:
    """Make a temporary account permanent and keep its quiz attempts."""

    user.is_temporary = False
    user.session_id = None
    user.expires_at = None
    if password:
        user.password_hash = hash_password(password)
    if first_name:
        user.first_name = first_name
    if last_name:
        user.last_name = last_name
    for attempt in user.quiz_attempts:
        attempt.expires_at = None
    if commit:
        db.session.commit()
    return user


def list_attempts(user_id: int) -> List[QuizAttempt]:
    return (
        QuizAttempt.query.filter_by(user_id=user_id)
        .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
        .all()
    )


def get_attempt(attempt_id: int) -> QuizAttempt | None:
    return db.session.get(QuizAttempt, attempt_id)


def attempt_visible_to(attempt: QuizAttempt, user: Optional[User], session_id: str | None) -> bool:
    if user is not None and (user.is_admin or attempt.user_id == user.id):
        return True
    return bool(session_id and attempt.session_id and attempt.session_id == session_id)
