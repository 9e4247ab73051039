"""Payments for report unlocks and their refunds."""

from __future__ import annotations

from ..extensions import db
from ..utils.clock import utcnow

PAYMENT_STATUSES = ("pending", "completed", "failed", "refunded", "partially_refunded")


class Payment(db.Model):
    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    quiz_attempt_id = db.Column(
        db.Integer, db.ForeignKey("quiz_attempts.id", ondelete="SET NULL"), index=True
    )
    amount_cents = db.Column(db.Integer, nullable=False)
    currency = db.Column(db.String(8), nullable=False, default="usd")
    type = db.Column(db.String(32), nullable=False, default="report_unlock")
    status = db.Column(db.String(32), nullable=False, default="pending", index=True)
    stripe_payment_intent_id = db.Column(db.String(255), unique=True, index=True)
    failure_reason = db.Column(db.String(255))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    completed_at = db.Column(db.DateTime(timezone=True))

    user = db.relationship("User", back_populates="payments")
    quiz_attempt = db.relationship("QuizAttempt", back_populates="payments")
    refunds = db.relationship(
        "Refund",
        back_populates="payment",
        cascade="all, delete-orphan",
        order_by="Refund.created_at",
    )

    @property
    def refunded_cents(self) -> int:
        return sum(refund.amount_cents for refund in self.refunds if refund.status != "failed")

    @property
    def refundable_cents(self) -> int:
        return max(0, self.amount_cents - self.refunded_cents)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Payment id={self.id} status={self.status} amount={self.amount_cents}>"


class Refund(db.Model):
    __tablename__ = "refunds"

    id = db.Column(db.Integer, primary_key=True)
    payment_id = db.Column(db.Integer, db.ForeignKey("payments.id"), nullable=False, index=True)
    amount_cents = db.Column(db.Integer, nullable=False)
    currency = db.Column(db.String(8), nullable=False, default="usd")
    reason = db.Column(db.String(255))
    status = db.Column(db.String(32), nullable=False, default="pending")
    stripe_refund_id = db.Column(db.String(255), unique=True)
    admin_user_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    processed_at = db.Column(db.DateTime(timezone=True))

    payment = db.relationship("Payment", back_populates="refunds")
    admin_user = db.relationship("User", foreign_keys=[admin_user_id])
