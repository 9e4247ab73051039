"""Catalog browsing and stateless scoring endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, abort, jsonify, request

from ..schemas import QuizAnswersSchema
from ..services import business_catalog, personality_service, scoring_service
from .common import register_error_handlers

scoring_bp = Blueprint("scoring_bp", __name__)
register_error_handlers(scoring_bp)

answers_schema = QuizAnswersSchema()


@scoring_bp.get("/ping")
def ping():
    return jsonify({"module": "scoring", "status": "ok"})


@scoring_bp.get("/models")
def list_models():
    return jsonify({"models": [model.to_dict() for model in business_catalog.list_models()]})


@scoring_bp.get("/models/<model_id>")
def get_model(model_id: str):
    try:
        model = business_catalog.get_model(model_id)
    except KeyError:
        abort(HTTPStatus.NOT_FOUND)
    return jsonify({"model": model.to_dict()})


@scoring_bp.post("/preview")
def preview():
    answers = answers_schema.load(request.get_json() or {})
    matches = scoring_service.calculate_all_business_model_matches(answers)
    return jsonify(
        {
            "matches": [match.to_dict() for match in matches],
            "distribution": scoring_service.score_distribution(matches),
        }
    )


@scoring_bp.post("/personality")
def personality():
    answers = answers_schema.load(request.get_json() or {})
    scores = personality_service.calculate_personality_scores(answers)
    return jsonify({"scores": scores, "descriptions": personality_service.describe_personality(scores)})
