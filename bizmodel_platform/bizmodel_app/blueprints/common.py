"""Helpers shared by the API blueprints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, abort, jsonify, request
from flask_jwt_extended import get_current_user
from marshmallow import ValidationError

from ..errors import DomainError
from ..models import QuizAttempt
from ..services import quiz_service

SESSION_HEADER = "X-Session-ID"


def register_error_handlers(bp: Blueprint) -> None:
    @bp.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return jsonify({"errors": err.messages}), HTTPStatus.BAD_REQUEST

    @bp.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        return jsonify(err.to_dict()), err.status


def session_id() -> str | None:
    value = (request.headers.get(SESSION_HEADER) or "").strip()
    return value or None


def optional_user():
    """The authenticated user, or None on routes with an optional token."""

    return get_current_user()


def require_admin():
    user = optional_user()
    if user is None or not user.is_admin:
        abort(HTTPStatus.FORBIDDEN)


def load_visible_attempt(attempt_id: int) -> QuizAttempt:
    attempt = quiz_service.get_attempt(attempt_id)
    if attempt is None:
        abort(HTTPStatus.NOT_FOUND)
    if not quiz_service.attempt_visible_to(attempt, optional_user(), session_id()):
        abort(HTTPStatus.NOT_FOUND)
    return attempt
