"""Twelve-trait personality profile derived from quiz answers.

Choice answers add fixed contributions per trait; 1-5 scale answers add
contributions proportional to their distance from the midpoint. Raw totals are
then mapped onto a 1-5 scale using fixed bounds.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Mapping

TRAITS = (
    "social_comfort",
    "discipline",
    "risk_tolerance",
    "tech_comfort",
    "structure_preference",
    "motivation",
    "feedback_resilience",
    "creativity",
    "confidence",
    "adaptability",
    "focus_preference",
    "resilience",
)

RAW_BOUNDS: Dict[str, tuple[int, int]] = {
    "social_comfort": (-15, 25),
    "discipline": (-12, 28),
    "risk_tolerance": (-18, 22),
    "tech_comfort": (-8, 32),
    "structure_preference": (-20, 20),
    "motivation": (-10, 30),
    "feedback_resilience": (-15, 25),
    "creativity": (-12, 28),
    "confidence": (-18, 22),
    "adaptability": (-10, 30),
    "focus_preference": (-15, 25),
    "resilience": (-12, 28),
}

CHOICE_CONTRIBUTIONS: Dict[str, Dict[str, Dict[str, float]]] = {
    "main_motivation": {
        "financial-freedom": {"social_comfort": 1, "discipline": 2, "risk_tolerance": 2, "motivation": 3, "confidence": 2, "adaptability": 2, "focus_preference": 3, "resilience": 2},
        "flexibility-autonomy": {"social_comfort": -1, "discipline": 1, "risk_tolerance": 1, "motivation": 2, "structure_preference": -2, "adaptability": 3, "focus_preference": 1, "resilience": 1},
        "purpose-impact": {"social_comfort": 2, "motivation": 3, "creativity": 3, "confidence": 1, "adaptability": 2, "focus_preference": 2, "resilience": 3},
        "creativity-passion": {"creativity": 4, "motivation": 2, "structure_preference": -1, "confidence": 1, "adaptability": 3, "focus_preference": 1, "resilience": 2},
    },
    "first_income_timeline": {
        "under-1-month": {"motivation": 4, "risk_tolerance": 3, "confidence": 2, "discipline": -1, "adaptability": 4, "focus_preference": 4, "resilience": 3},
        "1-3-months": {"motivation": 3, "risk_tolerance": 2, "confidence": 1, "discipline": 1, "adaptability": 3, "focus_preference": 3, "resilience": 2},
        "3-6-months": {"motivation": 2, "risk_tolerance": 1, "confidence": 1, "discipline": 2, "adaptability": 2, "focus_preference": 2, "resilience": 3},
        "no-rush": {"motivation": 1, "risk_tolerance": -1, "confidence": -1, "discipline": 3, "adaptability": 1, "focus_preference": 1, "resilience": 4},
    },
    "business_exit_plan": {
        "yes": {"motivation": 2, "risk_tolerance": 2, "confidence": 1, "structure_preference": 1},
        "no": {"motivation": 1, "risk_tolerance": -1, "confidence": -1, "structure_preference": -1},
        "not-sure": {"motivation": 1},
    },
    "business_growth_size": {
        "side-income": {"confidence": -1, "motivation": 1, "risk_tolerance": -1, "discipline": 1},
        "full-time-income": {"confidence": 1, "motivation": 2, "risk_tolerance": 1, "discipline": 2},
        "multi-6-figure": {"confidence": 2, "motivation": 3, "risk_tolerance": 2, "discipline": 3},
        "widely-recognized": {"confidence": 3, "motivation": 4, "risk_tolerance": 3, "discipline": 4, "social_comfort": 2},
    },
    "learning_preference": {
        "hands-on": {"creativity": 2, "structure_preference": -1, "risk_tolerance": 1, "tech_comfort": 1},
        "tutorials": {"structure_preference": 1, "tech_comfort": 2},
        "reading": {"creativity": 1, "structure_preference": 2, "risk_tolerance": -1},
        "coaching": {"structure_preference": 1, "risk_tolerance": -1, "social_comfort": 1},
    },
    "tool_learning_willingness": {
        "yes": {"tech_comfort": 3, "structure_preference": 1, "motivation": 1, "confidence": 1},
        "no": {"tech_comfort": -3, "structure_preference": -1, "motivation": -1, "confidence": -1},
    },
    "repetitive_tasks_feeling": {
        "avoid": {"discipline": -2, "structure_preference": -2, "creativity": 2, "motivation": -1},
        "tolerate": {"discipline": 1},
        "dont-mind": {"discipline": 2, "structure_preference": 1, "creativity": -1, "motivation": 1},
        "enjoy": {"discipline": 3, "structure_preference": 2, "creativity": -2, "motivation": 2},
    },
    "work_collaboration_preference": {
        "solo-only": {"social_comfort": -3, "structure_preference": -1, "confidence": -1, "creativity": 1},
        "mostly-solo": {"social_comfort": -1, "creativity": 1},
        "team-oriented": {"social_comfort": 3, "structure_preference": 1, "confidence": 1},
        "both": {"social_comfort": 1, "confidence": 1, "creativity": 1},
    },
    "work_structure_preference": {
        "clear-steps": {"structure_preference": 3, "discipline": 2, "creativity": -1, "risk_tolerance": -1},
        "some-structure": {"structure_preference": 1, "discipline": 1},
        "mostly-flexible": {"structure_preference": -1, "creativity": 1, "risk_tolerance": 1},
        "total-freedom": {"structure_preference": -3, "discipline": -1, "creativity": 2, "risk_tolerance": 2},
    },
    "workspace_availability": {
        "yes": {"discipline": 2, "structure_preference": 2, "confidence": 1, "tech_comfort": 1},
        "no": {"discipline": -2, "structure_preference": -2, "confidence": -1, "tech_comfort": -1},
    },
    "support_system_strength": {
        "none": {"confidence": -2, "feedback_resilience": -2, "motivation": -1, "social_comfort": -1},
        "one-two": {},
        "small-helpful-group": {"confidence": 1, "feedback_resilience": 1, "motivation": 1, "social_comfort": 1},
        "very-strong": {"confidence": 2, "feedback_resilience": 2, "motivation": 2, "social_comfort": 2},
    },
    "decision_making_style": {
        "quickly-instinctively": {"risk_tolerance": 2, "structure_preference": -2, "confidence": 1, "creativity": 1},
        "after-some-research": {"risk_tolerance": 1, "confidence": 1, "discipline": 1},
        "logical-process": {"structure_preference": 2, "confidence": 1, "discipline": 2},
        "talking-to-others": {"risk_tolerance": -1, "social_comfort": 2},
    },
    "path_preference": {
        "proven-paths": {"creativity": -2, "risk_tolerance": -2, "structure_preference": 2, "confidence": 1},
        "mix": {"confidence": 1},
        "mostly-original": {"creativity": 2, "risk_tolerance": 2, "structure_preference": -1, "confidence": 1},
        "build-something-new": {"creativity": 3, "risk_tolerance": 3, "structure_preference": -2, "confidence": 2},
    },
    "online_presence_comfort": {
        "yes": {"social_comfort": 2, "confidence": 2, "tech_comfort": 1, "creativity": 1},
        "no": {"social_comfort": -2, "confidence": -2, "tech_comfort": -1, "creativity": -1},
    },
    "client_calls_comfort": {
        "yes": {"social_comfort": 3, "confidence": 2, "feedback_resilience": 1},
        "no": {"social_comfort": -3, "confidence": -2, "feedback_resilience": -1},
    },
    "physical_shipping_openness": {
        "yes": {"discipline": 2, "structure_preference": 2, "tech_comfort": 1},
        "no": {"discipline": -1, "structure_preference": -1},
    },
    "work_style_preference": {
        "create-once-passive": {"creativity": 2, "motivation": 2, "structure_preference": 1, "discipline": 1},
        "work-with-people": {"social_comfort": 3, "discipline": 2, "feedback_resilience": 1},
        "mix-both": {"creativity": 1, "social_comfort": 1, "discipline": 1, "motivation": 1},
    },
}

# Numeric answers land in the highest threshold they reach.
BUCKET_CONTRIBUTIONS: Dict[str, tuple[tuple[float, Dict[str, float]], ...]] = {
    "success_income_goal": (
        (10000, {"confidence": 3, "motivation": 4, "risk_tolerance": 3, "adaptability": 4, "focus_preference": 4, "resilience": 4}),
        (5000, {"confidence": 2, "motivation": 3, "risk_tolerance": 2, "adaptability": 3, "focus_preference": 3, "resilience": 3}),
        (2000, {"confidence": 1, "motivation": 2, "risk_tolerance": 1, "adaptability": 2, "focus_preference": 2, "resilience": 2}),
        (0, {"confidence": -2, "motivation": 1, "risk_tolerance": -1, "adaptability": 1, "focus_preference": 2, "resilience": 1}),
    ),
    "upfront_investment": (
        (2000, {"risk_tolerance": 3, "confidence": 2, "motivation": 3}),
        (1000, {"risk_tolerance": 1, "confidence": 1, "motivation": 2}),
        (250, {"risk_tolerance": -1, "confidence": -1, "motivation": 1}),
        (0, {"risk_tolerance": -3, "confidence": -2, "motivation": -1}),
    ),
    "weekly_time_commitment": (
        (25, {"discipline": 3, "motivation": 3, "confidence": 2}),
        (10, {"discipline": 2, "motivation": 2, "confidence": 1}),
        (5, {"discipline": 1, "motivation": 1}),
        (0, {"discipline": -2, "motivation": -1, "confidence": -1}),
    ),
}

FAMILIAR_TOOL_BONUSES: Dict[str, Dict[str, float]] = {
    "google-docs-sheets": {"tech_comfort": 2, "discipline": 1, "adaptability": 1, "focus_preference": 1},
    "canva": {"tech_comfort": 2, "creativity": 1, "adaptability": 1, "focus_preference": 1},
    "notion": {"tech_comfort": 3, "structure_preference": 1, "adaptability": 1, "focus_preference": 1},
    "shopify-wix": {"tech_comfort": 3, "confidence": 1, "adaptability": 1, "focus_preference": 1},
    "zoom-streamyard": {"tech_comfort": 2, "social_comfort": 1, "adaptability": 1, "focus_preference": 1},
}


def _floor(value: float) -> int:
    return math.floor(value)


def _centered(weights: Dict[str, Callable[[float], float]]) -> Callable[[float], Dict[str, float]]:
    def contribute(value: float) -> Dict[str, float]:
        return {trait: fn(value) for trait, fn in weights.items()}

    return contribute


def _inverse_five(value: float) -> float:
    return 6 - value


SCALE_CONTRIBUTIONS: Dict[str, Callable[[float], Dict[str, float]]] = {
    "passion_identity_alignment": _centered({
        "creativity": lambda v: v - 3,
        "motivation": lambda v: _floor((v - 3) * 1.5),
        "structure_preference": lambda v: -(v - 3),
        "adaptability": lambda v: v - 3,
        "focus_preference": lambda v: v - 3,
    }),
    "passive_income_importance": _centered({
        "motivation": lambda v: v - 3,
        "discipline": lambda v: _floor((v - 3) * 1.5),
        "structure_preference": lambda v: v - 3,
    }),
    "long_term_consistency": _centered({
        "discipline": lambda v: (v - 3) * 2,
        "motivation": lambda v: v - 3,
        "feedback_resilience": lambda v: v - 3,
        "confidence": lambda v: _floor((v - 3) * 1.5),
        "adaptability": lambda v: v - 3,
        "focus_preference": lambda v: v - 3,
        "resilience": lambda v: v,
    }),
    "trial_error_comfort": _centered({
        "risk_tolerance": lambda v: (v - 3) * 2,
        "structure_preference": lambda v: -(v - 3) * 2,
        "creativity": lambda v: v - 3,
        "feedback_resilience": lambda v: v - 3,
        "adaptability": lambda v: v,
        "focus_preference": lambda v: v - 3,
        "resilience": lambda v: (v - 1) * 0.8,
    }),
    "systems_routines_enjoyment": _centered({
        "discipline": lambda v: (v - 3) * 2,
        "structure_preference": lambda v: (v - 3) * 2,
        "creativity": lambda v: -(v - 3),
        "tech_comfort": lambda v: v - 3,
    }),
    "discouragement_resilience": _centered({
        "feedback_resilience": lambda v: (v - 3) * 2,
        "motivation": lambda v: v - 3,
        "confidence": lambda v: v - 3,
        "discipline": lambda v: _floor((v - 3) * 1.5),
        "adaptability": lambda v: v - 3,
        "focus_preference": lambda v: v - 3,
        "resilience": lambda v: v,
    }),
    "organization_level": _centered({
        "discipline": lambda v: (v - 3) * 2,
        "structure_preference": lambda v: (v - 3) * 2,
        "confidence": lambda v: v - 3,
        "tech_comfort": lambda v: _floor((v - 3) * 1.5),
    }),
    "self_motivation_level": _centered({
        "motivation": lambda v: (v - 3) * 2,
        "discipline": lambda v: (v - 3) * 2,
        "confidence": lambda v: v - 3,
        "feedback_resilience": lambda v: _floor((v - 3) * 1.5),
    }),
    "uncertainty_handling": _centered({
        "risk_tolerance": lambda v: (v - 3) * 2,
        "structure_preference": lambda v: -(v - 3) * 2,
        "confidence": lambda v: v - 3,
        "creativity": lambda v: _floor((v - 3) * 1.5),
        "adaptability": lambda v: v,
        "focus_preference": lambda v: v - 3,
        "resilience": lambda v: (v - 1) * 0.7,
    }),
    "brand_face_comfort": _centered({
        "social_comfort": lambda v: (v - 3) * 2,
        "confidence": lambda v: (v - 3) * 2,
        "motivation": lambda v: _floor((v - 3) * 1.5),
        "creativity": lambda v: v - 3,
    }),
    "competitiveness_level": _centered({
        "motivation": lambda v: (v - 3) * 2,
        "confidence": lambda v: (v - 3) * 2,
        "risk_tolerance": lambda v: v - 3,
        "feedback_resilience": lambda v: _floor((v - 3) * 1.5),
    }),
    "creative_work_enjoyment": _centered({
        "creativity": lambda v: (v - 3) * 2,
        "structure_preference": lambda v: -(v - 3),
        "motivation": lambda v: v - 3,
        "confidence": lambda v: _floor((v - 3) * 1.5),
        "adaptability": lambda v: v - 3,
        "focus_preference": _inverse_five,
    }),
    "direct_communication_enjoyment": _centered({
        "social_comfort": lambda v: (v - 3) * 2,
        "confidence": lambda v: (v - 3) * 2,
        "feedback_resilience": lambda v: v - 3,
        "motivation": lambda v: _floor((v - 3) * 1.5),
    }),
    "tech_skills_rating": _centered({
        "tech_comfort": lambda v: (v - 3) * 3,
        "confidence": lambda v: v - 3,
        "structure_preference": lambda v: _floor((v - 3) * 0.5),
    }),
    "internet_device_reliability": _centered({
        "tech_comfort": lambda v: (v - 3) * 2,
        "structure_preference": lambda v: v - 3,
        "confidence": lambda v: _floor((v - 3) * 1.5),
        "discipline": lambda v: v - 3,
    }),
    "risk_comfort_level": _centered({
        "risk_tolerance": lambda v: (v - 3) * 3,
        "confidence": lambda v: (v - 3) * 2,
        "motivation": lambda v: v - 3,
        "feedback_resilience": lambda v: _floor((v - 3) * 1.5),
    }),
    "feedback_rejection_response": _centered({
        "feedback_resilience": lambda v: (v - 3) * 3,
        "confidence": lambda v: (v - 3) * 2,
        "motivation": lambda v: v - 3,
        "social_comfort": lambda v: _floor((v - 3) * 1.5),
        "adaptability": lambda v: v - 3,
        "focus_preference": lambda v: v - 3,
        "resilience": lambda v: v,
    }),
    "control_importance": _centered({
        "confidence": lambda v: (v - 3) * 2,
        "structure_preference": lambda v: v - 3,
        "risk_tolerance": lambda v: _floor((v - 3) * 1.5),
        "discipline": lambda v: v - 3,
    }),
}

DESCRIPTIONS: Dict[str, Dict[str, str]] = {
    "social_comfort": {
        "low": "Prefers working independently and behind-the-scenes",
        "medium": "Comfortable with moderate social interaction",
        "high": "Thrives on social interaction and being visible",
    },
    "discipline": {
        "low": "Works best with flexibility and variety",
        "medium": "Balances structure with adaptability",
        "high": "Excels with consistent routines and systems",
    },
    "risk_tolerance": {
        "low": "Prefers proven, safe approaches",
        "medium": "Comfortable with calculated risks",
        "high": "Embraces uncertainty and bold ventures",
    },
    "tech_comfort": {
        "low": "Prefers simple, familiar tools",
        "medium": "Comfortable learning new technologies",
        "high": "Loves exploring cutting-edge tools",
    },
    "structure_preference": {
        "low": "Thrives with creative freedom",
        "medium": "Appreciates some guidance and flexibility",
        "high": "Performs best with clear frameworks",
    },
    "motivation": {
        "low": "Steady, sustainable approach",
        "medium": "Balanced drive and patience",
        "high": "High energy and ambitious goals",
    },
    "feedback_resilience": {
        "low": "Sensitive to criticism, needs encouragement",
        "medium": "Handles feedback constructively",
        "high": "Uses criticism as fuel for improvement",
    },
    "creativity": {
        "low": "Prefers systematic, logical approaches",
        "medium": "Balances creativity with practicality",
        "high": "Thrives on innovation and original ideas",
    },
    "confidence": {
        "low": "Cautious and thoughtful decision-maker",
        "medium": "Balanced confidence and humility",
        "high": "Bold and decisive leader",
    },
    "adaptability": {
        "low": "Prefers stability and routine",
        "medium": "Adjusts well to moderate changes",
        "high": "Thrives in dynamic, changing environments",
    },
    "focus_preference": {
        "low": "Prefers creative, varied tasks",
        "medium": "Balances focus with creativity",
        "high": "Excels at deep, concentrated work",
    },
    "resilience": {
        "low": "Needs support during setbacks",
        "medium": "Recovers steadily from challenges",
        "high": "Bounces back quickly from failures",
    },
}


def _add(raw: Dict[str, float], contributions: Mapping[str, float]) -> None:
    for trait, value in contributions.items():
        if trait in raw:
            raw[trait] += value


def _scale_value(value) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not 1 <= value <= 5:
        return None
    return value


def _bucket(value, buckets) -> Mapping[str, float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        # Missing amounts count as the lowest bucket.
        value = 0
    for threshold, contributions in buckets:
        if value >= threshold:
            return contributions
    return buckets[-1][1]


def _normalize(trait: str, raw_value: float) -> float:
    low, high = RAW_BOUNDS[trait]
    normalized = 1 + ((raw_value - low) / (high - low)) * 4
    clamped = max(1.0, min(5.0, normalized))
    return math.floor(clamped * 10 + 0.5) / 10


def calculate_personality_scores(answers: Mapping) -> Dict[str, float]:
    """Return the twelve trait scores on a 1.0-5.0 scale."""

    if not isinstance(answers, Mapping):
        raise ValueError("Invalid quiz data provided")

    raw: Dict[str, float] = {trait: 0.0 for trait in TRAITS}

    for key, options in CHOICE_CONTRIBUTIONS.items():
        _add(raw, options.get(answers.get(key), {}))

    for key, buckets in BUCKET_CONTRIBUTIONS.items():
        _add(raw, _bucket(answers.get(key), buckets))

    for key, contribute in SCALE_CONTRIBUTIONS.items():
        value = _scale_value(answers.get(key))
        if value is not None:
            _add(raw, contribute(value))

    tools = answers.get("familiar_tools")
    if isinstance(tools, (list, tuple)):
        for tool in tools:
            _add(raw, FAMILIAR_TOOL_BONUSES.get(tool, {}))

    return {trait: _normalize(trait, raw[trait]) for trait in TRAITS}


def trait_level(score: float) -> str:
    if score <= 2.5:
        return "low"
    if score <= 3.5:
        return "medium"
    return "high"


def describe_personality(scores: Mapping[str, float]) -> Dict[str, str]:
    if not isinstance(scores, Mapping):
        raise ValueError("scores must be a mapping")
    return {
        trait: DESCRIPTIONS[trait][trait_level(value)]
        for trait, value in scores.items()
        if trait in DESCRIPTIONS
    }
