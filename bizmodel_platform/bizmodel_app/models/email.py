"""Outgoing email audit trail and the retry queue backing store."""

from __future__ import annotations

from ..extensions import db
from ..utils.clock import utcnow


class EmailLog(db.Model):
    __tablename__ = "email_logs"

    id = db.Column(db.Integer, primary_key=True)
    recipient = db.Column(db.String(255), nullable=False, index=True)
    email_type = db.Column(db.String(64), nullable=False)
    subject = db.Column(db.String(255), nullable=False)
    quiz_attempt_id = db.Column(
        db.Integer, db.ForeignKey("quiz_attempts.id", ondelete="SET NULL"), index=True
    )
    status = db.Column(db.String(32), nullable=False)
    message_id = db.Column(db.String(255))
    error = db.Column(db.Text)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)


class RetryJob(db.Model):
    __tablename__ = "retry_jobs"

    id = db.Column(db.Integer, primary_key=True)
    kind = db.Column(db.String(64), nullable=False, index=True)
    payload = db.Column(db.JSON, nullable=False)
    retry_count = db.Column(db.Integer, nullable=False, default=0)
    last_error = db.Column(db.Text)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    last_attempt_at = db.Column(db.DateTime(timezone=True))

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<RetryJob id={self.id} kind={self.kind} retries={self.retry_count}>"
