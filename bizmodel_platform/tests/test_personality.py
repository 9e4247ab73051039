"""Tests for the personality profile."""

from __future__ import annotations

import pytest

from bizmodel_app.services import personality_service


def test_scores_cover_every_trait(quiz_answers):
    scores = personality_service.calculate_personality_scores(quiz_answers)
    assert set(scores) == set(personality_service.TRAITS)
    assert all(1.0 <= value <= 5.0 for value in scores.values())
    assert all(round(value, 1) == value for value in scores.values())


def test_empty_answers_map_to_neutral_positions():
    scores = personality_service.calculate_personality_scores({})
    assert scores["structure_preference"] == 3.0
    assert scores["social_comfort"] == 2.5
    assert scores["tech_comfort"] == 1.8


def test_familiar_tools_raise_tech_comfort():
    scores = personality_service.calculate_personality_scores({"familiar_tools": ["notion"]})
    assert scores["tech_comfort"] == 2.1


def test_invalid_answers_rejected():
    with pytest.raises(ValueError):
        personality_service.calculate_personality_scores("nope")


@pytest.mark.parametrize("score, level", [(1.0, "low"), (2.5, "low"), (3.0, "medium"), (3.5, "medium"), (3.6, "high")])
def test_trait_level(score, level):
    assert personality_service.trait_level(score) == level


def test_descriptions_follow_scores(quiz_answers):
    scores = personality_service.calculate_personality_scores(quiz_answers)
    descriptions = personality_service.describe_personality(scores)
    assert set(descriptions) == set(personality_service.TRAITS)
    assert all(isinstance(text, str) and text for text in descriptions.values())


def test_personality_endpoint(client, quiz_answers):
    resp = client.post("/api/scoring/personality", json=quiz_answers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert set(data["scores"]) == set(personality_service.TRAITS)
    assert set(data["descriptions"]) == set(personality_service.TRAITS)
