"""Tests for business model matching and the catalog endpoints."""

from __future__ import annotations

import pytest

from bizmodel_app.services import business_catalog, scoring_service
from bizmodel_app.services.scoring_service import ModelMatch

PHYSICAL_MODELS = {
    "e-commerce",
    "online-reselling",
    "handmade-goods",
    "amazon-fba",
    "print-on-demand",
    "dropshipping",
}


def test_every_catalog_model_is_scored(quiz_answers):
    matches = scoring_service.calculate_all_business_model_matches(quiz_answers)
    assert len(matches) == len(business_catalog.list_models()) == 26
    assert {match.id for match in matches} == set(business_catalog.model_ids())
    scores = [match.score for match in matches]
    assert scores == sorted(scores, reverse=True)
    assert all(0 <= score <= 100 for score in scores)
    for match in matches:
        assert match.category == scoring_service.categorize(match.score)
        assert match.fit_score == match.score


def test_matching_is_deterministic(quiz_answers):
    first = scoring_service.calculate_all_business_model_matches(quiz_answers)
    second = scoring_service.calculate_all_business_model_matches(dict(quiz_answers))
    assert first == second


def test_empty_answers_score_zero_in_catalog_order():
    matches = scoring_service.calculate_all_business_model_matches({})
    assert [match.id for match in matches] == list(business_catalog.model_ids())
    assert {match.score for match in matches} == {0}
    assert {match.category for match in matches} == {"Poor Fit"}


def test_non_mapping_answers_rejected():
    with pytest.raises(ValueError):
        scoring_service.calculate_all_business_model_matches(["not", "a", "mapping"])


def test_shipping_refusal_sinks_physical_models():
    matches = scoring_service.calculate_all_business_model_matches(
        {"physical_shipping_openness": "no"}
    )
    bottom = {match.id for match in matches[-len(PHYSICAL_MODELS):]}
    assert bottom == PHYSICAL_MODELS
    assert all(match.score == 0 for match in matches if match.id in PHYSICAL_MODELS)
    assert all(match.score == 100 for match in matches if match.id not in PHYSICAL_MODELS)
    assert matches[0].id == "content-creation"


def test_out_of_range_scale_answers_are_ignored():
    matches = scoring_service.calculate_all_business_model_matches({"tech_skills_rating": 9})
    assert {match.score for match in matches} == {0}


@pytest.mark.parametrize(
    "score, category",
    [
        (100, "Best Fit"),
        (75, "Best Fit"),
        (74, "Strong Fit"),
        (60, "Strong Fit"),
        (59, "Possible Fit"),
        (45, "Possible Fit"),
        (44, "Poor Fit"),
        (0, "Poor Fit"),
    ],
)
def test_categorize_thresholds(score, category):
    assert scoring_service.categorize(score) == category


def test_score_distribution_buckets():
    matches = [
        ModelMatch("a", "A", 95, "Best Fit"),
        ModelMatch("b", "B", 90, "Best Fit"),
        ModelMatch("c", "C", 85, "Best Fit"),
        ModelMatch("d", "D", 70, "Strong Fit"),
        ModelMatch("e", "E", 69, "Strong Fit"),
    ]
    assert scoring_service.score_distribution(matches) == {
        "excellent": 2,
        "good": 1,
        "fair": 1,
        "poor": 1,
    }


def test_top_and_bottom_matches(quiz_answers):
    matches = scoring_service.calculate_all_business_model_matches(quiz_answers)
    assert scoring_service.top_matches(matches) == matches[:3]
    bottom = scoring_service.bottom_matches(matches, 2)
    assert bottom == [matches[-1], matches[-2]]
    assert scoring_service.bottom_matches(matches, 0) == []
    assert scoring_service.find_match(matches, "freelancing").id == "freelancing"
    assert scoring_service.find_match(matches, "unknown") is None


def test_get_model_unknown_raises():
    with pytest.raises(KeyError):
        business_catalog.get_model("time-travel-agency")


def test_list_models_endpoint(client):
    resp = client.get("/api/scoring/models")
    assert resp.status_code == 200
    models = resp.get_json()["models"]
    assert len(models) == 26
    assert {"id", "name", "difficulty", "average_income", "tools", "skills"} <= set(models[0])


def test_get_model_endpoint(client):
    resp = client.get("/api/scoring/models/freelancing")
    assert resp.status_code == 200
    assert resp.get_json()["model"]["name"]
    assert client.get("/api/scoring/models/unknown").status_code == 404


def test_preview_endpoint(client, quiz_answers):
    resp = client.post("/api/scoring/preview", json=quiz_answers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert len(data["matches"]) == 26
    assert sum(data["distribution"].values()) == 26


def test_preview_rejects_invalid_answers(client):
    resp = client.post("/api/scoring/preview", json={"tech_skills_rating": 9})
    assert resp.status_code == 400
    assert "tech_skills_rating" in resp.get_json()["errors"]


def test_preview_rejects_empty_answers(client):
    resp = client.post("/api/scoring/preview", json={})
    assert resp.status_code == 400
