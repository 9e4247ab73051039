"""User domain models."""

from __future__ import annotations

from ..extensions import db
from ..utils.clock import utcnow


class User(db.Model):
    """Registered account, or a temporary account created from a quiz email."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255))
    first_name = db.Column(db.String(120))
    last_name = db.Column(db.String(120))
    role = db.Column(db.String(32), nullable=False, default="user")
    is_paid = db.Column(db.Boolean, nullable=False, default=False)
    is_temporary = db.Column(db.Boolean, nullable=False, default=False)
    session_id = db.Column(db.String(128), index=True)
    expires_at = db.Column(db.DateTime(timezone=True))
    is_unsubscribed = db.Column(db.Boolean, nullable=False, default=False)
    password_reset_token = db.Column(db.String(255))
    password_reset_requested_at = db.Column(db.DateTime(timezone=True))
    password_reset_expires_at = db.Column(db.DateTime(timezone=True))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    quiz_attempts = db.relationship(
        "QuizAttempt",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="QuizAttempt.completed_at.desc()",
    )
    payments = db.relationship("Payment", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def display_name(self) -> str:
        if self.first_name:
            return self.first_name
        return self.email.split("@")[0]

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        kind = "temporary" if self.is_temporary else self.role
        return f"<User {self.email} ({kind})>"
