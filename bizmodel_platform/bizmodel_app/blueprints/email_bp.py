"""Email sending endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from ..extensions import limiter
from ..schemas import (
    ContactFormSchema,
    FullReportEmailSchema,
    QuizResultsEmailSchema,
    UnsubscribeSchema,
)
from ..services import email_service
from ..utils.signed_urls import BadSignature
from .common import load_visible_attempt, register_error_handlers

email_bp = Blueprint("email_bp", __name__)
register_error_handlers(email_bp)

quiz_results_schema = QuizResultsEmailSchema()
full_report_schema = FullReportEmailSchema()
contact_schema = ContactFormSchema()
unsubscribe_schema = UnsubscribeSchema()


def _email_limit():
    return current_app.config.get("EMAIL_RATE_LIMIT", "10 per minute")


@email_bp.get("/ping")
def ping():
    return jsonify({"module": "email", "status": "ok"})


@email_bp.post("/quiz-results")
@limiter.limit(_email_limit)
@jwt_required(optional=True)
def quiz_results():
    payload = quiz_results_schema.load(request.get_json() or {})
    attempt = load_visible_attempt(payload["quiz_attempt_id"])
    return jsonify(email_service.send_quiz_results(attempt, payload["email"]))


@email_bp.post("/full-report")
@limiter.limit(_email_limit)
@jwt_required(optional=True)
def full_report():
    payload = full_report_schema.load(request.get_json() or {})
    attempt = load_visible_attempt(payload["quiz_attempt_id"])
    return jsonify(email_service.send_full_report(attempt, payload["email"]))


@email_bp.post("/contact")
@limiter.limit(_email_limit)
def contact():
    payload = contact_schema.load(request.get_json() or {})
    result = email_service.send_contact_form(
        payload["name"],
        payload["email"],
        payload["subject"],
        payload["message"],
        payload.get("category"),
    )
    return jsonify(result), HTTPStatus.ACCEPTED


@email_bp.post("/unsubscribe")
def unsubscribe():
    payload = unsubscribe_schema.load(request.get_json() or {})
    try:
        user = email_service.unsubscribe(payload["token"])
    except BadSignature:
        return jsonify({"message": "Invalid unsubscribe link"}), HTTPStatus.BAD_REQUEST
    return jsonify({"unsubscribed": user is not None})
