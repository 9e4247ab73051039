"""Cached AI-written insights for a quiz attempt."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List

from flask import current_app
from werkzeug.exceptions import NotFound

from ..errors import AIContentError, ReportLocked
from ..extensions import db
from ..models import AIContent, QuizAttempt
from ..utils.clock import utcnow
from . import business_catalog, personality_service, report_access_service, score_store
from .ai_client import extract_message_text, get_ai_client

PREVIEW_INSIGHTS = "preview-insights"
FULL_REPORT_INSIGHTS = "full-report-insights"
MODEL_ANALYSIS = "model-analysis"

CONTENT_GATES = {
    PREVIEW_INSIGHTS: report_access_service.RESULTS_PREVIEW,
    FULL_REPORT_INSIGHTS: report_access_service.FULL_REPORT,
    MODEL_ANALYSIS: report_access_service.FULL_REPORT,
}

SYSTEM_PROMPT = (
    "You are a business advisor for BizModelAI. You explain why business models fit "
    "a person's quiz answers. Address the reader as 'you'. Respond with a single JSON "
    "object and no other text."
)

PROMPT_SHAPES = {
    PREVIEW_INSIGHTS: (
        '{"preview_insights": "three short paragraphs", '
        '"key_insights": ["four items"], "success_predictors": ["four items"]}'
    ),
    FULL_REPORT_INSIGHTS: (
        '{"personalized_summary": "string", "custom_recommendations": ["six items"], '
        '"potential_challenges": ["four items"], "success_strategies": ["six items"], '
        '"action_plan": {"week1": [], "month1": [], "month3": [], "month6": []}, '
        '"motivational_message": "string"}'
    ),
    MODEL_ANALYSIS: (
        '{"full_analysis": "string", "key_insights": ["four items"], '
        '"personalized_recommendations": ["four items"], '
        '"success_predictors": ["four items"], "risk_factors": ["three items"]}'
    ),
}


def _validate_type(content_type: str) -> None:
    if content_type not in CONTENT_GATES:
        raise NotFound(f"unknown content type: {content_type}")


def ensure_content_access(attempt: QuizAttempt, content_type: str) -> None:
    _validate_type(content_type)
    gate = CONTENT_GATES[content_type]
    if not report_access_service.is_report_unlocked(attempt.id, gate):
        raise ReportLocked(gate, attempt.id)


def content_hash(content: Any) -> str:
    encoded = json.dumps(content, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


def get_content(attempt_id: int, content_type: str) -> AIContent | None:
    return AIContent.query.filter_by(quiz_attempt_id=attempt_id, content_type=content_type).first()


def list_content(attempt_id: int) -> List[AIContent]:
    return (
        AIContent.query.filter_by(quiz_attempt_id=attempt_id)
        .order_by(AIContent.content_type.asc())
        .all()
    )


def save_content(attempt_id: int, content_type: str, content: Any, *, source: str = "ai") -> AIContent:
    _validate_type(content_type)
    row = get_content(attempt_id, content_type)
    if row is None:
        row = AIContent(quiz_attempt_id=attempt_id, content_type=content_type)
        db.session.add(row)
    row.content = content
    row.content_hash = content_hash(content)
    row.source = source
    row.generated_at = utcnow()
    db.session.commit()
    return row


def delete_content(attempt_id: int, content_type: str) -> bool:
    row = get_content(attempt_id, content_type)
    if row is None:
        return False
    db.session.delete(row)
    db.session.commit()
    return True


def _top_models(attempt: QuizAttempt, count: int = 3) -> List[Dict[str, Any]]:
    stored = score_store.calculate_and_store_scores(attempt)
    return [
        {"id": row.business_model_id, "name": row.business_model_name, "score": row.score}
        for row in stored[:count]
    ]


def build_prompt(attempt: QuizAttempt, content_type: str) -> List[Dict[str, str]]:
    answers = attempt.quiz_data or {}
    top = _top_models(attempt)
    personality = personality_service.calculate_personality_scores(answers)
    lines = [
        "Quiz answers:",
        json.dumps(answers, sort_keys=True),
        "",
        "Top business model matches:",
    ]
    lines.extend(f"- {model['name']} ({model['score']}% fit)" for model in top)
    lines.extend(["", "Personality scores (1-5):", json.dumps(personality, sort_keys=True)])
    lines.extend(["", "Respond with JSON shaped like:", PROMPT_SHAPES[content_type]])
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "\n".join(lines)},
    ]


def _parse_json(text: str) -> Dict[str, Any]:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AIContentError("ai_bad_response", "AI response was not valid JSON") from exc
    if not isinstance(parsed, dict):
        raise AIContentError("ai_bad_response", "AI response was not a JSON object")
    return parsed


def fallback_content(attempt: QuizAttempt, content_type: str) -> Dict[str, Any]:
    """Catalog-only content used when the AI provider is unavailable."""

    top = _top_models(attempt)
    details = [business_catalog.get_model(model["id"]) for model in top]
    best = details[0] if details else None
    names = ", ".join(model.name for model in details)
    snapshot = report_access_service.personal_snapshot(attempt.quiz_data or {})

    if content_type == PREVIEW_INSIGHTS:
        return {
            "preview_insights": (
                f"Your strongest matches are {names}. "
                f"{best.name if best else 'Your top match'} fits how you want to work best."
            ),
            "key_insights": snapshot[:4],
            "success_predictors": [f"Build the core skills: {', '.join(model.skills[:3])}" for model in details],
        }
    if content_type == FULL_REPORT_INSIGHTS:
        return {
            "personalized_summary": f"Based on your answers, {names} are the business models that suit you best.",
            "custom_recommendations": [f"Start with {model.name}: {model.description}" for model in details],
            "potential_challenges": [
                f"{model.name} usually takes {model.time_to_profit} to become profitable" for model in details
            ],
            "success_strategies": [f"Learn {', '.join(model.tools[:3])}" for model in details if model.tools],
            "action_plan": {
                "week1": [f"Research {best.name if best else 'your top match'} and pick a niche"],
                "month1": ["Set up your tools and publish your first offer"],
                "month3": ["Collect feedback and refine what works"],
                "month6": ["Double down on the channels that bring income"],
            },
            "motivational_message": "Small, consistent steps add up. Start with one model and commit to it.",
        }
    return {
        "full_analysis": (
            f"{best.name} is your strongest match with a {top[0]['score']}% fit."
            if best
            else "No business model analysis is available yet."
        ),
        "key_insights": snapshot[:4],
        "personalized_recommendations": [f"Consider {model.name} ({model.difficulty} difficulty)" for model in details],
        "success_predictors": [f"Startup cost of {model.startup_cost} for {model.name}" for model in details],
        "risk_factors": [f"Income for {model.name} ranges {model.potential_income}" for model in details],
    }


def generate_content(attempt: QuizAttempt, content_type: str, force: bool = False) -> AIContent:
    """Return cached content or generate, cache and return new content."""

    ensure_content_access(attempt, content_type)
    if not force:
        cached = get_content(attempt.id, content_type)
        if cached is not None:
            return cached

    if not current_app.config.get("AI_CONTENT_ENABLE", True):
        return save_content(attempt.id, content_type, fallback_content(attempt, content_type), source="fallback")

    try:
        client = get_ai_client()
        response = client.chat(build_prompt(attempt, content_type))
        content = _parse_json(extract_message_text(response))
    except AIContentError as exc:
        current_app.logger.warning(
            "AI generation failed for attempt %s (%s): %s", attempt.id, content_type, exc.message
        )
        return save_content(attempt.id, content_type, fallback_content(attempt, content_type), source="fallback")
    return save_content(attempt.id, content_type, content, source="ai")
