"""Password reset token issuance and confirmation."""

from __future__ import annotations

import secrets
from datetime import timedelta
from urllib.parse import urlencode, urlparse

from flask import current_app
from werkzeug.exceptions import BadRequest

from ..extensions import db
from ..models import User
from ..utils import coerce_aware, hash_password, utcnow
from . import email_service

RESET_RESEND_INTERVAL_SECONDS = 300


def _ttl_minutes() -> int:
    return int(current_app.config.get("PASSWORD_RESET_TTL_MINUTES", 60))


def request_password_reset(email: str) -> None:
    """Issue a reset token and email it, if a permanent account exists.

    Unknown addresses return silently so callers cannot probe for accounts.
    """

    normalized = (email or "").strip().lower()
    if not normalized:
        raise BadRequest("reset_email_missing")
    user = User.query.filter_by(email=normalized).first()
    if not user or user.is_temporary:
        return

    now = utcnow()
    last_request = coerce_aware(user.password_reset_requested_at)
    if last_request and (now - last_request).total_seconds() < RESET_RESEND_INTERVAL_SECONDS:
        raise BadRequest("reset_recent")

    raw_token = secrets.token_urlsafe(48)
    user.password_reset_token = raw_token
    user.password_reset_requested_at = now
    user.password_reset_expires_at = now + timedelta(minutes=_ttl_minutes())
    db.session.commit()

    email_service.send_password_reset_email(user, build_reset_url(raw_token), _ttl_minutes())


def confirm_password_reset(token: str, new_password: str) -> User:
    if not token:
        raise BadRequest("reset_token_missing")
    user = User.query.filter_by(password_reset_token=token).first()
    if not user:
        raise BadRequest("reset_token_invalid")
    expires_at = coerce_aware(user.password_reset_expires_at)
    if not expires_at or utcnow() > expires_at:
        raise BadRequest("reset_token_expired")

    user.password_hash = hash_password(new_password)
    user.password_reset_token = None
    user.password_reset_requested_at = None
    user.password_reset_expires_at = None
    db.session.commit()
    current_app.logger.info("Password reset completed for user %s", user.id)
    return user


def build_reset_url(token: str) -> str:
    """Append the token to PASSWORD_RESET_URL, keeping any existing query."""

    raw_base = (current_app.config.get("PASSWORD_RESET_URL") or "").strip()
    if not raw_base:
        raw_base = f"{current_app.config.get('FRONTEND_URL', 'http://localhost:5173').rstrip('/')}/reset-password"
    if not raw_base.startswith(("http://", "https://")):
        raw_base = f"https://{raw_base.lstrip('/')}"
    parsed = urlparse(raw_base)
    separator = "&" if parsed.query else "?"
    return f"{raw_base}{separator}{urlencode({'token': token})}"
