"""Report unlock payments and the Stripe webhook."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from ..errors import PaymentError
from ..extensions import limiter
from ..schemas import PaymentSchema, ReportUnlockSchema
from ..services import payment_service
from .common import load_visible_attempt, optional_user, register_error_handlers

payment_bp = Blueprint("payment_bp", __name__)
register_error_handlers(payment_bp)

unlock_schema = ReportUnlockSchema()
payments_schema = PaymentSchema(many=True)


@payment_bp.get("/ping")
def ping():
    return jsonify({"module": "payments", "status": "ok"})


@payment_bp.get("/quote")
@jwt_required(optional=True)
def quote():
    return jsonify(payment_service.quote_report_unlock(optional_user()))


@payment_bp.post("/report-unlock")
@jwt_required(optional=True)
def report_unlock():
    payload = unlock_schema.load(request.get_json() or {})
    attempt = load_visible_attempt(payload["quiz_attempt_id"])
    user = optional_user() or attempt.user
    if user is None:
        raise PaymentError("email_required", "An email address is needed before paying")
    result = payment_service.create_report_payment(user, attempt)
    return jsonify(result), HTTPStatus.CREATED


@payment_bp.post("/webhook")
@limiter.exempt
def webhook():
    event = payment_service.verify_webhook(
        request.get_data(), request.headers.get("Stripe-Signature")
    )
    return jsonify(payment_service.handle_webhook_event(event))


@payment_bp.get("/history")
@jwt_required()
def history():
    return jsonify({"payments": payments_schema.dump(payment_service.list_payments(current_user.id))})
