"""Quiz submission and stored score endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from ..schemas import ModelMatchSchema, QuizAttemptSchema, QuizSubmissionSchema
from ..services import quiz_service, report_access_service, score_store
from .common import load_visible_attempt, optional_user, register_error_handlers, session_id

quiz_bp = Blueprint("quiz_bp", __name__)
register_error_handlers(quiz_bp)

submission_schema = QuizSubmissionSchema()
attempt_schema = QuizAttemptSchema()
attempts_schema = QuizAttemptSchema(many=True)
matches_schema = ModelMatchSchema(many=True)


@quiz_bp.get("/ping")
def ping():
    return jsonify({"module": "quiz", "status": "ok"})


@quiz_bp.post("/attempts")
@jwt_required(optional=True)
def submit_attempt():
    payload = submission_schema.load(request.get_json() or {})
    user = optional_user()
    guest_session = session_id()
    if user is None and payload.get("email"):
        user = quiz_service.get_or_create_temporary_user(
            guest_session,
            payload["email"],
            payload.get("first_name"),
            payload.get("last_name"),
        )

    attempt = quiz_service.create_quiz_attempt_with_access(
        payload["quiz_data"], user=user, session_id=guest_session
    )
    scores = score_store.get_stored_scores(attempt.id)
    return (
        jsonify(
            {
                "attempt": attempt_schema.dump(attempt),
                "matches": matches_schema.dump(scores),
                "report_access": {
                    row.report_type: row.is_unlocked
                    for row in report_access_service.get_report_access(attempt.id)
                },
            }
        ),
        HTTPStatus.CREATED,
    )


@quiz_bp.get("/attempts")
@jwt_required()
def list_attempts():
    return jsonify({"attempts": attempts_schema.dump(quiz_service.list_attempts(current_user.id))})


@quiz_bp.get("/attempts/<int:attempt_id>")
@jwt_required(optional=True)
def get_attempt(attempt_id: int):
    attempt = load_visible_attempt(attempt_id)
    return jsonify({"attempt": attempt_schema.dump(attempt)})


@quiz_bp.get("/attempts/<int:attempt_id>/scores")
@jwt_required(optional=True)
def attempt_scores(attempt_id: int):
    attempt = load_visible_attempt(attempt_id)
    scores = score_store.calculate_and_store_scores(attempt)
    return jsonify({"quiz_attempt_id": attempt.id, "matches": matches_schema.dump(scores)})


@quiz_bp.get("/latest-scores")
@jwt_required()
def latest_scores():
    scores = score_store.get_stored_scores_by_email(current_user.email)
    return jsonify({"matches": matches_schema.dump(scores)})
