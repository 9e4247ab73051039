"""Weighted matching of quiz answers against the business model catalog.

Every model is scored by the same list of attribute comparisons. Each
comparison reads one or more answers, compares them with the model's
`ModelProfile` and yields a fit between 0 and 1. Comparisons whose answers
are missing return ``None`` and are left out of both the weighted sum and the
total weight, so partial quizzes still rank every model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from .business_catalog import BusinessModel, ModelProfile, list_models

CATEGORY_THRESHOLDS = (
    (75, "Best Fit"),
    (60, "Strong Fit"),
    (45, "Possible Fit"),
)
DEFAULT_CATEGORY = "Poor Fit"

TIMELINE_MONTHS = {
    "under-1-month": 1,
    "1-3-months": 3,
    "3-6-months": 6,
    "no-rush": 24,
}
YES_SOMEWHAT_NO = {"yes": 5, "somewhat": 3, "maybe": 3, "some": 3, "not-sure": 3, "unsure": 3, "no": 1}
SHIPPING_FIT = {"yes": 1.0, "maybe": 0.5, "no": 0.0}
COLLABORATION_FIT = {
    "solo-only": {"solo": 1.0, "mixed": 0.5, "team": 0.0},
    "mostly-solo": {"solo": 1.0, "mixed": 0.8, "team": 0.3},
    "team-oriented": {"solo": 0.3, "mixed": 0.8, "team": 1.0},
    "both": {"solo": 0.8, "mixed": 1.0, "team": 0.8},
}
# Keyed by whether the model involves teaching.
TEACHING_FIT = {
    True: {"teach": 1.0, "both": 0.8, "solve": 0.3, "neither": 0.1},
    False: {"teach": 0.6, "both": 1.0, "solve": 1.0, "neither": 1.0},
}


@dataclass(frozen=True)
class ModelMatch:
    id: str
    name: str
    score: int
    category: str

    @property
    def fit_score(self) -> int:
        return self.score

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "category": self.category,
            "fit_score": self.fit_score,
        }


Evaluator = Callable[[Mapping, ModelProfile], Optional[float]]


@dataclass(frozen=True)
class Comparison:
    name: str
    weight: float
    evaluate: Evaluator


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _number(answers: Mapping, key: str) -> float | None:
    value = answers.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _scale(answers: Mapping, key: str) -> float | None:
    """Return a 1-5 answer, ignoring anything outside the scale."""

    value = _number(answers, key)
    if value is None or not 1 <= value <= 5:
        return None
    return value


def _average(values: Iterable[float | None]) -> float | None:
    present = [value for value in values if value is not None]
    if not present:
        return None
    return sum(present) / len(present)


def _shortfall(have: float, need: float, span: float = 4.0) -> float:
    """Full fit when ``have`` meets ``need``; falls off linearly below it."""

    if have >= need:
        return 1.0
    return _clamp(1.0 - (need - have) / span)


def _closeness(value: float, target: float, span: float = 4.0) -> float:
    return _clamp(1.0 - abs(value - target) / span)


def _ratio(have: float, need: float) -> float:
    if need <= 0 or have >= need:
        return 1.0
    return _clamp(have / need)


def _choice_level(answers: Mapping, key: str) -> float | None:
    value = answers.get(key)
    if not isinstance(value, str):
        return None
    return YES_SOMEWHAT_NO.get(value)


def _income_timeline(answers, profile):
    months = TIMELINE_MONTHS.get(answers.get("first_income_timeline"))
    if months is None:
        return None
    return _shortfall(months, profile.months_to_first_income, span=12)


def _investment(answers, profile):
    budget = _number(answers, "upfront_investment")
    if budget is None:
        return None
    return _ratio(budget, profile.min_investment)


def _income_goal(answers, profile):
    goal = _number(answers, "success_income_goal")
    if goal is None:
        return None
    return _ratio(profile.income_ceiling, goal)


def _weekly_time(answers, profile):
    hours = _number(answers, "weekly_time_commitment")
    if hours is None:
        return None
    return _ratio(hours, profile.min_weekly_hours)


def _visibility(answers, profile):
    comfort = _scale(answers, "brand_face_comfort")
    if comfort is None:
        return None
    return _shortfall(comfort, profile.visibility)


def _client_contact(answers, profile):
    comfort = _average(
        [
            _scale(answers, "direct_communication_enjoyment"),
            _choice_level(answers, "client_calls_comfort"),
        ]
    )
    if comfort is None:
        return None
    return _shortfall(comfort, profile.client_contact)


def _tech(answers, profile):
    skills = _scale(answers, "tech_skills_rating")
    if skills is None:
        return None
    if answers.get("tool_learning_willingness") == "yes":
        skills = min(5.0, skills + 0.5)
    return _shortfall(skills, profile.tech_level)


def _creativity(answers, profile):
    enjoyment = _scale(answers, "creative_work_enjoyment")
    if enjoyment is None:
        return None
    return _closeness(enjoyment, profile.creativity)


def _risk(answers, profile):
    comfort = _scale(answers, "risk_comfort_level")
    if comfort is None:
        return None
    return _shortfall(comfort, profile.risk)


def _structure(answers, profile):
    preference = _average(
        [
            _scale(answers, "systems_routines_enjoyment"),
            _scale(answers, "organization_level"),
        ]
    )
    if preference is None:
        return None
    return _closeness(preference, profile.structure)


def _self_direction(answers, profile):
    motivation = _scale(answers, "self_motivation_level")
    if motivation is None:
        return None
    return _shortfall(motivation, profile.self_direction)


def _consistency(answers, profile):
    consistency = _scale(answers, "long_term_consistency")
    if consistency is None:
        return None
    return _shortfall(consistency, profile.consistency)


def _passive(answers, profile):
    importance = _scale(answers, "passive_income_importance")
    if importance is None:
        return None
    return _clamp(1.0 - max(0.0, importance - profile.passive_potential) / 4.0)


def _physical_products(answers, profile):
    openness = SHIPPING_FIT.get(answers.get("physical_shipping_openness"))
    if openness is None:
        return None
    return openness if profile.physical_products else 1.0


def _inventory(answers, profile):
    comfort = _scale(answers, "inventory_comfort")
    if comfort is None:
        return None
    return (comfort - 1) / 4.0 if profile.holds_inventory else 1.0


def _teaching(answers, profile):
    parts: List[float] = []
    preference = TEACHING_FIT[profile.teaching].get(answers.get("teach_vs_solve_preference"))
    if preference is not None:
        parts.append(preference)
    comfort = _scale(answers, "teaching_comfort")
    if comfort is not None:
        parts.append((comfort - 1) / 4.0 if profile.teaching else 1.0)
    return _average(parts)


def _sales(answers, profile):
    comfort = _average(
        [
            _choice_level(answers, "promoting_others_openness"),
            _scale(answers, "sales_comfort"),
        ]
    )
    if comfort is None:
        return None
    return _shortfall(comfort, profile.sales_intensity)


def _audience(answers, profile):
    reach = _average(
        [
            _choice_level(answers, "existing_audience"),
            _scale(answers, "social_media_interest"),
        ]
    )
    if reach is None:
        return None
    return _shortfall(reach, profile.audience_building)


def _collaboration(answers, profile):
    fits = COLLABORATION_FIT.get(answers.get("work_collaboration_preference"))
    if fits is None:
        return None
    return fits[profile.collaboration]


def _resilience(answers, profile):
    resilience = _average(
        [
            _scale(answers, "discouragement_resilience"),
            _scale(answers, "feedback_rejection_response"),
        ]
    )
    if resilience is None:
        return None
    return _shortfall(resilience, profile.resilience)


COMPARISONS: Sequence[Comparison] = (
    Comparison("income_timeline", 1.5, _income_timeline),
    Comparison("investment", 1.5, _investment),
    Comparison("income_goal", 1.2, _income_goal),
    Comparison("weekly_time", 1.2, _weekly_time),
    Comparison("visibility", 1.0, _visibility),
    Comparison("client_contact", 1.0, _client_contact),
    Comparison("tech", 1.0, _tech),
    Comparison("creativity", 0.8, _creativity),
    Comparison("risk", 1.2, _risk),
    Comparison("structure", 0.8, _structure),
    Comparison("self_direction", 1.0, _self_direction),
    Comparison("consistency", 1.0, _consistency),
    Comparison("passive_income", 0.8, _passive),
    Comparison("physical_products", 1.0, _physical_products),
    Comparison("inventory", 0.8, _inventory),
    Comparison("teaching", 0.8, _teaching),
    Comparison("sales", 1.0, _sales),
    Comparison("audience", 1.0, _audience),
    Comparison("collaboration", 0.8, _collaboration),
    Comparison("resilience", 1.0, _resilience),
)


def categorize(score: int) -> str:
    for threshold, label in CATEGORY_THRESHOLDS:
        if score >= threshold:
            return label
    return DEFAULT_CATEGORY


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_model(answers: Mapping, model: BusinessModel) -> int:
    weighted = 0.0
    total_weight = 0.0
    for comparison in COMPARISONS:
        fit = comparison.evaluate(answers, model.profile)
        if fit is None:
            continue
        weighted += comparison.weight * _clamp(fit)
        total_weight += comparison.weight
    if total_weight <= 0:
        return 0
    return max(0, min(100, _round_half_up(100 * weighted / total_weight)))


def calculate_all_business_model_matches(
    answers: Mapping, catalog: Sequence[BusinessModel] | None = None
) -> List[ModelMatch]:
    """Score every catalog entry and return all of them, best first.

    Ties keep catalog order. The function is pure: it never touches the
    database or the network.
    """

    if not isinstance(answers, Mapping):
        raise ValueError("answers must be a mapping")
    models = list_models() if catalog is None else catalog
    matches = []
    for model in models:
        score = score_model(answers, model)
        matches.append(ModelMatch(id=model.id, name=model.name, score=score, category=categorize(score)))
    return sorted(matches, key=lambda match: match.score, reverse=True)


def top_matches(matches: Sequence[ModelMatch], count: int = 3) -> List[ModelMatch]:
    return list(matches[: max(0, count)])


def bottom_matches(matches: Sequence[ModelMatch], count: int = 3) -> List[ModelMatch]:
    """Return the weakest matches, worst first."""

    if count <= 0:
        return []
    return list(reversed(matches[-count:]))


def matches_by_category(matches: Sequence[ModelMatch], category: str) -> List[ModelMatch]:
    return [match for match in matches if match.category == category]


def find_match(matches: Sequence[ModelMatch], model_id: str) -> ModelMatch | None:
    for match in matches:
        if match.id == model_id:
            return match
    return None


def score_distribution(matches: Sequence[ModelMatch]) -> dict:
    distribution = {"excellent": 0, "good": 0, "fair": 0, "poor": 0}
    for match in matches:
        if match.score >= 90:
            distribution["excellent"] += 1
        elif match.score >= 80:
            distribution["good"] += 1
        elif match.score >= 70:
            distribution["fair"] += 1
        else:
            distribution["poor"] += 1
    return distribution
