"""Transactional emails: quiz results, reports, welcome, reset and contact."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from flask import current_app, render_template

from ..errors import EmailRateLimited, ReportLocked
from ..extensions import db
from ..metrics import record_email
from ..models import EmailLog, QuizAttempt, User
from ..utils.clock import utcnow
from ..utils.signed_urls import BadSignature, sign_payload, verify_payload
from . import mail_service, report_access_service, retry_queue, score_store

RETRY_KIND = "email"
IDLE_ENTRY_SECONDS = 3600


@dataclass
class _SendWindow:
    last_sent: float
    count: int


class EmailRateLimiter:
    """Per-recipient cooldown between emails.

    The first ``initial_limit`` sends to an address only need ``cooldown``
    seconds between them; after that every send waits ``extended_cooldown``.
    A successful check records the send.
    """

    def __init__(
        self,
        cooldown: float,
        extended_cooldown: float,
        initial_limit: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cooldown = cooldown
        self.extended_cooldown = extended_cooldown
        self.initial_limit = initial_limit
        self.clock = clock
        self._entries: Dict[str, _SendWindow] = {}

    def check(self, email: str) -> tuple[bool, Optional[dict]]:
        key = email.strip().lower()
        now = self.clock()
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = _SendWindow(last_sent=now, count=1)
            return True, None

        within_initial = entry.count <= self.initial_limit
        window = self.cooldown if within_initial else self.extended_cooldown
        elapsed = now - entry.last_sent
        if elapsed < window:
            return False, {
                "remaining_seconds": math.ceil(window - elapsed),
                "type": "cooldown" if within_initial else "extended",
            }
        entry.last_sent = now
        entry.count += 1
        return True, None

    def cleanup(self) -> int:
        now = self.clock()
        stale = [key for key, entry in self._entries.items() if now - entry.last_sent > IDLE_ENTRY_SECONDS]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def reset(self) -> None:
        self._entries.clear()


def get_rate_limiter() -> EmailRateLimiter:
    app = current_app
    limiter = app.extensions.get("email_rate_limiter")
    if limiter is None:
        limiter = EmailRateLimiter(
            cooldown=app.config.get("EMAIL_COOLDOWN_SECONDS", 60),
            extended_cooldown=app.config.get("EMAIL_EXTENDED_COOLDOWN_SECONDS", 300),
            initial_limit=app.config.get("EMAIL_INITIAL_LIMIT", 5),
        )
        app.extensions["email_rate_limiter"] = limiter
    return limiter


def _enforce_rate_limit(email: str, email_type: str, subject: str, quiz_attempt_id: int | None = None) -> None:
    limiter = get_rate_limiter()
    limiter.cleanup()
    allowed, info = limiter.check(email)
    if allowed:
        return
    _log(email, email_type, subject, "rate_limited", quiz_attempt_id=quiz_attempt_id)
    raise EmailRateLimited(info["remaining_seconds"], info["type"])


def make_unsubscribe_token(email: str) -> str:
    config = current_app.config
    return sign_payload(
        config["UNSUBSCRIBE_SECRET"],
        config.get("UNSUBSCRIBE_SALT", "email-unsubscribe"),
        {"email": email.strip().lower()},
    )


def unsubscribe_url(email: str) -> str:
    base = current_app.config.get("FRONTEND_URL", "").rstrip("/")
    return f"{base}/unsubscribe?token={make_unsubscribe_token(email)}"


def unsubscribe(token: str) -> User | None:
    """Mark the token's user as unsubscribed.

    Raises ``BadSignature`` when the token is invalid. Returns ``None`` when
    no account uses the address.
    """

    config = current_app.config
    data = verify_payload(token, config["UNSUBSCRIBE_SECRET"], config.get("UNSUBSCRIBE_SALT", "email-unsubscribe"))
    email = (data or {}).get("email")
    if not email:
        raise BadSignature("token has no email")
    user = User.query.filter_by(email=email).first()
    if user is None:
        return None
    user.is_unsubscribed = True
    db.session.commit()
    current_app.logger.info("User %s unsubscribed from emails", user.id)
    return user


def _is_unsubscribed(email: str) -> bool:
    user = User.query.filter_by(email=email.strip().lower()).first()
    return bool(user and user.is_unsubscribed)


def _log(
    recipient: str,
    email_type: str,
    subject: str,
    status: str,
    *,
    quiz_attempt_id: int | None = None,
    message_id: str | None = None,
    error: str | None = None,
) -> EmailLog:
    entry = EmailLog(
        recipient=recipient,
        email_type=email_type,
        subject=subject,
        status=status,
        quiz_attempt_id=quiz_attempt_id,
        message_id=message_id,
        error=error,
    )
    db.session.add(entry)
    db.session.commit()
    record_email(email_type, status)
    return entry


def _deliver(
    email_type: str,
    to: str,
    subject: str,
    template: str,
    context: Dict[str, Any],
    *,
    quiz_attempt_id: int | None = None,
    reply_to: str | None = None,
    marketing: bool = False,
) -> Dict[str, Any]:
    if marketing and _is_unsubscribed(to):
        _log(to, email_type, subject, "skipped", quiz_attempt_id=quiz_attempt_id, error="unsubscribed")
        return {"status": "skipped", "reason": "unsubscribed"}

    context = dict(context)
    context.setdefault("app_name", current_app.config.get("APP_NAME", "BizModelAI"))
    context.setdefault("frontend_url", current_app.config.get("FRONTEND_URL", ""))
    context.setdefault("year", utcnow().year)
    list_unsubscribe = None
    if marketing:
        list_unsubscribe = unsubscribe_url(to)
        context["unsubscribe_url"] = list_unsubscribe
    html = render_template(f"emails/{template}.html", **context)
    text = render_template(f"emails/{template}.txt", **context)

    try:
        message_id = mail_service.send_email(
            to=to,
            subject=subject,
            text=text,
            html=html,
            reply_to=reply_to,
            unsubscribe_url=list_unsubscribe,
            headers={"X-Mail-Template": template},
        )
    except mail_service.MailServiceError as exc:
        retry_queue.enqueue(
            RETRY_KIND,
            {
                "email_type": email_type,
                "to": to,
                "subject": subject,
                "text": text,
                "html": html,
                "reply_to": reply_to,
                "quiz_attempt_id": quiz_attempt_id,
            },
            error=str(exc),
        )
        _log(to, email_type, subject, "queued", quiz_attempt_id=quiz_attempt_id, error=str(exc))
        return {"status": "queued"}

    status = "sent" if message_id else "skipped"
    _log(to, email_type, subject, status, quiz_attempt_id=quiz_attempt_id, message_id=message_id)
    return {"status": status, "message_id": message_id}


def deliver_queued_email(payload: Dict[str, Any]) -> bool:
    """Retry handler for emails that failed on first delivery."""

    try:
        message_id = mail_service.send_email(
            to=payload["to"],
            subject=payload["subject"],
            text=payload.get("text"),
            html=payload.get("html"),
            reply_to=payload.get("reply_to"),
        )
    except mail_service.MailServiceError:
        return False
    _log(
        payload["to"],
        payload.get("email_type", "unknown"),
        payload["subject"],
        "sent",
        quiz_attempt_id=payload.get("quiz_attempt_id"),
        message_id=message_id,
    )
    return True


def register_retry_handlers() -> None:
    retry_queue.register_handler(RETRY_KIND, deliver_queued_email)


def _results_context(attempt: QuizAttempt) -> Dict[str, Any]:
    scores = score_store.calculate_and_store_scores(attempt)
    base = current_app.config.get("FRONTEND_URL", "").rstrip("/")
    return {
        "attempt": attempt,
        "top_matches": scores[:3],
        "snapshot": report_access_service.personal_snapshot(attempt.quiz_data or {}),
        "results_url": f"{base}/results?attempt={attempt.id}",
    }


def send_quiz_results(attempt: QuizAttempt, email: str) -> Dict[str, Any]:
    subject = "Your BizModelAI Quiz Results"
    _enforce_rate_limit(email, "quiz_results", subject, attempt.id)
    return _deliver(
        "quiz_results",
        email,
        subject,
        "quiz_results",
        _results_context(attempt),
        quiz_attempt_id=attempt.id,
        marketing=True,
    )


def send_full_report(attempt: QuizAttempt, email: str) -> Dict[str, Any]:
    if not report_access_service.is_report_unlocked(attempt.id, report_access_service.FULL_REPORT):
        raise ReportLocked(report_access_service.FULL_REPORT, attempt.id)
    subject = "Your Complete Business Report - BizModelAI"
    _enforce_rate_limit(email, "full_report", subject, attempt.id)
    context = _results_context(attempt)
    context["report"] = report_access_service.build_report(attempt, report_access_service.FULL_REPORT)
    return _deliver(
        "full_report",
        email,
        subject,
        "full_report",
        context,
        quiz_attempt_id=attempt.id,
        marketing=True,
    )


def send_welcome_email(user: User) -> Dict[str, Any]:
    subject = "Welcome to BizModelAI!"
    _enforce_rate_limit(user.email, "welcome", subject)
    return _deliver("welcome", user.email, subject, "welcome", {"user": user}, marketing=True)


def send_password_reset_email(user: User, reset_url: str, expires_minutes: int) -> Dict[str, Any]:
    subject = "Reset Your BizModelAI Password"
    return _deliver(
        "password_reset",
        user.email,
        subject,
        "password_reset",
        {"user": user, "reset_url": reset_url, "expires_minutes": expires_minutes},
    )


def send_contact_form(
    name: str,
    email: str,
    subject: str,
    message: str,
    category: str | None = None,
) -> Dict[str, Any]:
    """Forward a contact form to the team inbox and confirm receipt to the sender."""

    _enforce_rate_limit(email, "contact", f"New Contact Form: {subject}")
    context = {
        "name": name,
        "email": email,
        "subject": subject,
        "message": message,
        "category": category or "general",
        "submitted_at": utcnow(),
    }
    notification = _deliver(
        "contact_notification",
        current_app.config.get("CONTACT_INBOX", "team@bizmodelai.com"),
        f"New Contact Form: {subject}",
        "contact_notification",
        context,
        reply_to=email,
    )
    confirmation = _deliver(
        "contact_confirmation",
        email,
        "We received your message - BizModelAI",
        "contact_confirmation",
        context,
    )
    return {"notification": notification, "confirmation": confirmation}
