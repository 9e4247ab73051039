"""Pytest configuration for ensuring project modules resolve correctly."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from bizmodel_app import create_app
from bizmodel_app.extensions import db
from bizmodel_app.models import User
from bizmodel_app.utils.security import hash_password

COMPLETE_ANSWERS = {
    "main_motivation": "financial-freedom",
    "first_income_timeline": "3-6-months",
    "success_income_goal": 5000,
    "upfront_investment": 1000,
    "weekly_time_commitment": 20,
    "business_exit_plan": "not-sure",
    "business_growth_size": "full-time-income",
    "learning_preference": "hands-on",
    "tool_learning_willingness": "yes",
    "repetitive_tasks_feeling": "tolerate",
    "work_collaboration_preference": "mostly-solo",
    "work_structure_preference": "some-structure",
    "workspace_availability": "yes",
    "support_system_strength": "small-helpful-group",
    "familiar_tools": ["canva", "notion"],
    "decision_making_style": "after-some-research",
    "path_preference": "mix",
    "online_presence_comfort": "somewhat",
    "client_calls_comfort": "yes",
    "physical_shipping_openness": "no",
    "work_style_preference": "mix-both",
    "ecosystem_participation": "maybe",
    "existing_audience": "no",
    "promoting_others_openness": "yes",
    "teach_vs_solve_preference": "both",
    "passion_identity_alignment": 4,
    "passive_income_importance": 3,
    "long_term_consistency": 4,
    "trial_error_comfort": 3,
    "systems_routines_enjoyment": 3,
    "discouragement_resilience": 4,
    "organization_level": 4,
    "self_motivation_level": 4,
    "uncertainty_handling": 3,
    "brand_face_comfort": 3,
    "competitiveness_level": 3,
    "creative_work_enjoyment": 4,
    "direct_communication_enjoyment": 4,
    "tech_skills_rating": 4,
    "internet_device_reliability": 5,
    "risk_comfort_level": 3,
    "feedback_rejection_response": 3,
    "control_importance": 4,
    "social_media_interest": 3,
    "meaningful_contribution_importance": 4,
}


@pytest.fixture()
def app_with_db():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app_with_db):
    return app_with_db.test_client()


@pytest.fixture()
def quiz_answers():
    return dict(COMPLETE_ANSWERS)


@pytest.fixture()
def user_token(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "founder@example.com", "password": "StrongPass123!", "first_name": "Sam"},
    )
    assert resp.status_code == 201
    return resp.get_json()["access_token"]


@pytest.fixture()
def admin_token(app_with_db, client):
    with app_with_db.app_context():
        admin = User(
            email="admin@example.com",
            password_hash=hash_password("AdminPass123!"),
            role="admin",
        )
        db.session.add(admin)
        db.session.commit()
    resp = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "AdminPass123!"},
    )
    return resp.get_json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
