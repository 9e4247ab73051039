"""Cached AI content for quiz attempts."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, abort, jsonify, request
from flask_jwt_extended import jwt_required

from ..schemas import AIContentGenerateSchema, AIContentSaveSchema, AIContentSchema
from ..services import ai_content_service
from .common import load_visible_attempt, register_error_handlers

ai_bp = Blueprint("ai_bp", __name__)
register_error_handlers(ai_bp)

content_schema = AIContentSchema()
content_list_schema = AIContentSchema(many=True)
save_schema = AIContentSaveSchema()
generate_schema = AIContentGenerateSchema()


@ai_bp.get("/ping")
def ping():
    return jsonify({"module": "ai", "status": "ok"})


@ai_bp.get("/content/<int:attempt_id>")
@jwt_required(optional=True)
def list_content(attempt_id: int):
    attempt = load_visible_attempt(attempt_id)
    return jsonify({"content": content_list_schema.dump(ai_content_service.list_content(attempt.id))})


@ai_bp.get("/content/<int:attempt_id>/<content_type>")
@jwt_required(optional=True)
def get_content(attempt_id: int, content_type: str):
    attempt = load_visible_attempt(attempt_id)
    ai_content_service.ensure_content_access(attempt, content_type)
    row = ai_content_service.get_content(attempt.id, content_type)
    if row is None:
        abort(HTTPStatus.NOT_FOUND)
    return jsonify({"content": content_schema.dump(row)})


@ai_bp.post("/content/<int:attempt_id>/<content_type>")
@jwt_required(optional=True)
def save_content(attempt_id: int, content_type: str):
    attempt = load_visible_attempt(attempt_id)
    ai_content_service.ensure_content_access(attempt, content_type)
    payload = save_schema.load(request.get_json() or {})
    row = ai_content_service.save_content(attempt.id, content_type, payload["content"], source="client")
    return jsonify({"content": content_schema.dump(row)}), HTTPStatus.CREATED


@ai_bp.delete("/content/<int:attempt_id>/<content_type>")
@jwt_required(optional=True)
def delete_content(attempt_id: int, content_type: str):
    attempt = load_visible_attempt(attempt_id)
    ai_content_service.ensure_content_access(attempt, content_type)
    if not ai_content_service.delete_content(attempt.id, content_type):
        abort(HTTPStatus.NOT_FOUND)
    return "", HTTPStatus.NO_CONTENT


@ai_bp.post("/content/<int:attempt_id>/<content_type>/generate")
@jwt_required(optional=True)
def generate_content(attempt_id: int, content_type: str):
    attempt = load_visible_attempt(attempt_id)
    payload = generate_schema.load(request.get_json(silent=True) or {})
    row = ai_content_service.generate_content(attempt, content_type, force=payload["force"])
    return jsonify({"content": content_schema.dump(row)})
