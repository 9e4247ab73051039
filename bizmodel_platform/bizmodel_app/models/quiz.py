"""Quiz attempts and the data derived from them."""

from __future__ import annotations

from ..extensions import db
from ..utils.clock import utcnow


class QuizAttempt(db.Model):
    __tablename__ = "quiz_attempts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True)
    session_id = db.Column(db.String(128), index=True)
    quiz_data = db.Column(db.JSON, nullable=False)
    is_paid = db.Column(db.Boolean, nullable=False, default=False)
    completed_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at = db.Column(db.DateTime(timezone=True))

    user = db.relationship("User", back_populates="quiz_attempts")
    scores = db.relationship(
        "BusinessModelScore",
        back_populates="quiz_attempt",
        cascade="all, delete-orphan",
        order_by="BusinessModelScore.rank",
    )
    report_access = db.relationship(
        "ReportAccess",
        back_populates="quiz_attempt",
        cascade="all, delete-orphan",
    )
    ai_content = db.relationship(
        "AIContent",
        back_populates="quiz_attempt",
        cascade="all, delete-orphan",
    )
    payments = db.relationship("Payment", back_populates="quiz_attempt")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<QuizAttempt id={self.id} user_id={self.user_id} paid={self.is_paid}>"


class BusinessModelScore(db.Model):
    __tablename__ = "business_model_scores"
    __table_args__ = (
        db.UniqueConstraint(
            "quiz_attempt_id", "business_model_id", name="uq_score_attempt_model"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    quiz_attempt_id = db.Column(
        db.Integer,
        db.ForeignKey("quiz_attempts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    business_model_id = db.Column(db.String(64), nullable=False)
    business_model_name = db.Column(db.String(128), nullable=False)
    score = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(32), nullable=False)
    fit_score = db.Column(db.Integer, nullable=False)
    rank = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    quiz_attempt = db.relationship("QuizAttempt", back_populates="scores")


class ReportAccess(db.Model):
    __tablename__ = "report_access"
    __table_args__ = (
        db.UniqueConstraint("quiz_attempt_id", "report_type", name="uq_report_access"),
    )

    id = db.Column(db.Integer, primary_key=True)
    quiz_attempt_id = db.Column(
        db.Integer,
        db.ForeignKey("quiz_attempts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    report_type = db.Column(db.String(32), nullable=False)
    is_unlocked = db.Column(db.Boolean, nullable=False, default=False)
    unlocked_by = db.Column(db.String(32), nullable=False, default="locked")
    unlocked_at = db.Column(db.DateTime(timezone=True))
    expires_at = db.Column(db.DateTime(timezone=True))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    quiz_attempt = db.relationship("QuizAttempt", back_populates="report_access")


class AIContent(db.Model):
    __tablename__ = "ai_content"
    __table_args__ = (
        db.UniqueConstraint("quiz_attempt_id", "content_type", name="uq_ai_content"),
    )

    id = db.Column(db.Integer, primary_key=True)
    quiz_attempt_id = db.Column(
        db.Integer,
        db.ForeignKey("quiz_attempts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content_type = db.Column(db.String(64), nullable=False)
    content = db.Column(db.JSON, nullable=False)
    content_hash = db.Column(db.String(64), nullable=False)
    source = db.Column(db.String(16), nullable=False, default="ai")
    generated_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    quiz_attempt = db.relationship("QuizAttempt", back_populates="ai_content")
