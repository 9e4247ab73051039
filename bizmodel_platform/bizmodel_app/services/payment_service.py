"""Stripe-backed payments for report unlocks."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import stripe
from flask import current_app

from ..errors import PaymentError
from ..extensions import db
from ..metrics import record_payment_event
from ..models import Payment, QuizAttempt, Refund, User
from ..utils.clock import utcnow
from . import quiz_service, report_access_service

REPORT_UNLOCK = "report_unlock"
STRIPE_REFUND_REASONS = {"duplicate", "fraudulent", "requested_by_customer"}


def _stripe_key() -> str:
    key = current_app.config.get("STRIPE_SECRET_KEY")
    if not key:
        raise PaymentError("stripe_not_configured", "Stripe is not configured")
    return key


def has_completed_payment(user: User) -> bool:
    return (
        Payment.query.filter(
            Payment.user_id == user.id,
            Payment.status.in_(("completed", "partially_refunded")),
        ).first()
        is not None
    )


def quote_report_unlock(user: Optional[User]) -> Dict[str, Any]:
    config = current_app.config
    repeat = user is not None and has_completed_payment(user)
    amount = config["REPORT_UNLOCK_REPEAT_PRICE_CENTS"] if repeat else config["REPORT_UNLOCK_PRICE_CENTS"]
    return {
        "amount_cents": amount,
        "currency": config.get("PAYMENT_CURRENCY", "usd"),
        "is_repeat_purchase": repeat,
    }


def create_report_payment(user: User, attempt: QuizAttempt) -> Dict[str, Any]:
    """Create a PaymentIntent for unlocking the attempt's paid reports."""

    if attempt.is_paid:
        raise PaymentError("already_paid", "This quiz attempt is already unlocked")
    key = _stripe_key()
    quote = quote_report_unlock(user)

    try:
        intent = stripe.PaymentIntent.create(
            api_key=key,
            amount=quote["amount_cents"],
            currency=quote["currency"],
            automatic_payment_methods={"enabled": True},
            receipt_email=user.email,
            metadata={
                "user_id": str(user.id),
                "quiz_attempt_id": str(attempt.id),
                "type": REPORT_UNLOCK,
            },
            description="BizModelAI full report unlock",
        )
    except stripe.StripeError as exc:
        current_app.logger.error("Stripe PaymentIntent creation failed: %s", exc)
        raise PaymentError("stripe_error", str(exc)) from exc

    payment = Payment(
        user_id=user.id,
        quiz_attempt_id=attempt.id,
        amount_cents=quote["amount_cents"],
        currency=quote["currency"],
        type=REPORT_UNLOCK,
        status="pending",
        stripe_payment_intent_id=intent["id"],
    )
    db.session.add(payment)
    db.session.commit()
    record_payment_event("pending")
    current_app.logger.info(
        "Created payment %s for quiz attempt %s", payment.id, attempt.id
    )
    return {
        "payment_id": payment.id,
        "client_secret": intent["client_secret"],
        "amount_cents": payment.amount_cents,
        "currency": payment.currency,
        "is_repeat_purchase": quote["is_repeat_purchase"],
    }


def verify_webhook(payload: bytes, signature: str | None):
    secret = current_app.config.get("STRIPE_WEBHOOK_SECRET")
    if not secret:
        raise PaymentError("webhook_not_configured", "Stripe webhook secret is not configured")
    try:
        return stripe.Webhook.construct_event(payload, signature or "", secret)
    except ValueError as exc:
        raise PaymentError("invalid_payload", "Invalid webhook payload") from exc
    except stripe.SignatureVerificationError as exc:
        raise PaymentError("invalid_signature", "Invalid webhook signature") from exc


def _field(obj, key: str):
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _payment_for_intent(intent_id: str | None) -> Payment | None:
    if not intent_id:
        return None
    return Payment.query.filter_by(stripe_payment_intent_id=intent_id).first()


def handle_webhook_event(event) -> Dict[str, Any]:
    event_type = event["type"]
    intent = event["data"]["object"]
    if event_type not in {"payment_intent.succeeded", "payment_intent.payment_failed"}:
        return {"handled": False, "event_type": event_type}

    payment = _payment_for_intent(_field(intent, "id"))
    if payment is None:
        current_app.logger.warning("Webhook for unknown payment intent %s", _field(intent, "id"))
        return {"handled": False, "event_type": event_type, "reason": "unknown_payment"}

    if event_type == "payment_intent.succeeded":
        complete_payment(payment)
    else:
        error = _field(intent, "last_payment_error")
        fail_payment(payment, (_field(error, "message") if error else None) or "payment_failed")
    return {"handled": True, "event_type": event_type, "payment_id": payment.id, "status": payment.status}


def complete_payment(payment: Payment) -> Payment:
    """Mark the payment completed and unlock the reports it paid for."""

    if payment.status != "pending":
        return payment

    payment.status = "completed"
    payment.completed_at = utcnow()
    if payment.quiz_attempt_id:
        report_access_service.update_paid_status(payment.quiz_attempt_id, True, commit=False)
    user = payment.user
    user.is_paid = True
    if user.is_temporary:
        quiz_service.convert_temporary_user(user, commit=False)
    db.session.commit()
    record_payment_event("completed")
    current_app.logger.info(
        "Payment completed",
        extra={"payment_id": payment.id, "quiz_attempt_id": payment.quiz_attempt_id},
    )
    return payment


def fail_payment(payment: Payment, reason: str) -> Payment:
    if payment.status != "pending":
        return payment
    payment.status = "failed"
    payment.failure_reason = reason[:255]
    db.session.commit()
    record_payment_event("failed")
    current_app.logger.warning("Payment %s failed: %s", payment.id, reason)
    return payment


def create_refund(
    payment: Payment,
    amount_cents: int | None = None,
    reason: str = "requested_by_customer",
    admin: User | None = None,
) -> Refund:
    if payment.status not in {"completed", "partially_refunded"}:
        raise PaymentError("not_refundable", "Only completed payments can be refunded")
    refundable = payment.refundable_cents
    amount = refundable if amount_cents is None else amount_cents
    if amount <= 0 or amount > refundable:
        raise PaymentError(
            "invalid_refund_amount",
            "Refund amount exceeds the refundable balance",
            refundable_cents=refundable,
        )
    key = _stripe_key()

    params: Dict[str, Any] = {"payment_intent": payment.stripe_payment_intent_id, "amount": amount}
    if reason in STRIPE_REFUND_REASONS:
        params["reason"] = reason
    try:
        stripe_refund = stripe.Refund.create(api_key=key, **params)
    except stripe.StripeError as exc:
        current_app.logger.error("Stripe refund failed for payment %s: %s", payment.id, exc)
        raise PaymentError("stripe_error", str(exc)) from exc

    refund = Refund(
        payment=payment,
        amount_cents=amount,
        currency=payment.currency,
        reason=reason,
        status=_field(stripe_refund, "status") or "pending",
        stripe_refund_id=stripe_refund["id"],
        admin_user_id=admin.id if admin else None,
        processed_at=utcnow(),
    )
    db.session.add(refund)
    db.session.flush()
    payment.status = "refunded" if payment.refundable_cents == 0 else "partially_refunded"
    db.session.commit()
    record_payment_event(payment.status)
    current_app.logger.info(
        "Refunded %s cents of payment %s", amount, payment.id, extra={"admin_id": refund.admin_user_id}
    )
    return refund


def list_payments(user_id: int) -> List[Payment]:
    return (
        Payment.query.filter_by(user_id=user_id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .all()
    )


def list_all_payments(status: str | None = None, page: int = 1, per_page: int = 20) -> Dict[str, Any]:
    query = Payment.query
    if status:
        query = query.filter_by(status=status)
    total = query.count()
    items = (
        query.order_by(Payment.created_at.desc(), Payment.id.desc())
        .offset((max(page, 1) - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return {"items": items, "total": total, "page": page, "per_page": per_page}
