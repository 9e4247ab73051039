"""Schemas for quiz submissions, attempts and scores."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema

SCALE = validate.Range(min=1, max=5)
MAIN_MOTIVATIONS = ("financial-freedom", "flexibility-autonomy", "purpose-impact", "creativity-passion")
INCOME_TIMELINES = ("under-1-month", "1-3-months", "3-6-months", "no-rush")
YES_NO_NOT_SURE = ("yes", "no", "not-sure")
YES_NO_UNSURE = ("yes", "no", "unsure")
YES_NO_SOMEWHAT = ("yes", "no", "somewhat")
YES_NO_MAYBE = ("yes", "no", "maybe")
FAMILIAR_TOOLS = ("google-docs-sheets", "canva", "notion", "shopify-wix", "zoom-streamyard", "none")


def _choice(options):
    return fields.String(validate=validate.OneOf(options))


class QuizAnswersSchema(Schema):
    """Questionnaire answers. Every field is optional; unknown keys are dropped."""

    class Meta:
        unknown = EXCLUDE

    main_motivation = _choice(MAIN_MOTIVATIONS)
    first_income_timeline = _choice(INCOME_TIMELINES)
    success_income_goal = fields.Float(validate=validate.Range(min=0))
    upfront_investment = fields.Float(validate=validate.Range(min=0))
    weekly_time_commitment = fields.Float(validate=validate.Range(min=0, max=168))
    business_exit_plan = _choice(YES_NO_NOT_SURE)
    business_growth_size = _choice(("side-income", "full-time-income", "multi-6-figure", "widely-recognized"))
    learning_preference = _choice(("hands-on", "tutorials", "reading", "coaching"))
    tool_learning_willingness = _choice(YES_NO_UNSURE)
    repetitive_tasks_feeling = _choice(("avoid", "tolerate", "dont-mind", "enjoy"))
    work_collaboration_preference = _choice(("solo-only", "mostly-solo", "team-oriented", "both"))
    work_structure_preference = _choice(("clear-steps", "some-structure", "mostly-flexible", "total-freedom"))
    workspace_availability = _choice(("yes", "no"))
    support_system_strength = _choice(("none", "one-two", "small-helpful-group", "very-strong"))
    familiar_tools = fields.List(fields.String(validate=validate.OneOf(FAMILIAR_TOOLS)))
    decision_making_style = _choice(
        ("quickly-instinctively", "after-some-research", "logical-process", "talking-to-others")
    )
    path_preference = _choice(("proven-paths", "mix", "mostly-original", "build-something-new"))
    online_presence_comfort = _choice(YES_NO_SOMEWHAT)
    client_calls_comfort = _choice(YES_NO_SOMEWHAT)
    physical_shipping_openness = _choice(YES_NO_MAYBE)
    work_style_preference = _choice(("create-once-passive", "work-with-people", "mix-both"))
    ecosystem_participation = _choice(YES_NO_MAYBE)
    existing_audience = _choice(("yes", "no", "some"))
    promoting_others_openness = _choice(YES_NO_MAYBE)
    teach_vs_solve_preference = _choice(("teach", "solve", "both", "neither"))

    passion_identity_alignment = fields.Integer(validate=SCALE)
    passive_income_importance = fields.Integer(validate=SCALE)
    long_term_consistency = fields.Integer(validate=SCALE)
    trial_error_comfort = fields.Integer(validate=SCALE)
    systems_routines_enjoyment = fields.Integer(validate=SCALE)
    discouragement_resilience = fields.Integer(validate=SCALE)
    organization_level = fields.Integer(validate=SCALE)
    self_motivation_level = fields.Integer(validate=SCALE)
    uncertainty_handling = fields.Integer(validate=SCALE)
    brand_face_comfort = fields.Integer(validate=SCALE)
    competitiveness_level = fields.Integer(validate=SCALE)
    creative_work_enjoyment = fields.Integer(validate=SCALE)
    direct_communication_enjoyment = fields.Integer(validate=SCALE)
    tech_skills_rating = fields.Integer(validate=SCALE)
    internet_device_reliability = fields.Integer(validate=SCALE)
    risk_comfort_level = fields.Integer(validate=SCALE)
    feedback_rejection_response = fields.Integer(validate=SCALE)
    control_importance = fields.Integer(validate=SCALE)
    social_media_interest = fields.Integer(validate=SCALE)
    meaningful_contribution_importance = fields.Integer(validate=SCALE)

    # Adaptive follow-ups, only asked for some answer combinations.
    inventory_comfort = fields.Integer(validate=SCALE)
    digital_content_comfort = fields.Integer(validate=SCALE)
    teaching_comfort = fields.Integer(validate=SCALE)
    public_speaking_comfort = fields.Integer(validate=SCALE)
    sales_comfort = fields.Integer(validate=SCALE)

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ValidationError("At least one quiz answer is required.", "_schema")


class QuizSubmissionSchema(Schema):
    quiz_data = fields.Nested(QuizAnswersSchema, required=True)
    email = fields.Email()
    first_name = fields.String(validate=validate.Length(max=120))
    last_name = fields.String(validate=validate.Length(max=120))

    class Meta:
        unknown = EXCLUDE


class ModelMatchSchema(Schema):
    id = fields.String(attribute="business_model_id", dump_only=True)
    name = fields.String(attribute="business_model_name", dump_only=True)
    score = fields.Integer(dump_only=True)
    category = fields.String(dump_only=True)
    fit_score = fields.Integer(dump_only=True)


class QuizAttemptSchema(Schema):
    id = fields.Integer(dump_only=True)
    user_id = fields.Integer(dump_only=True, allow_none=True)
    session_id = fields.String(dump_only=True, allow_none=True)
    quiz_data = fields.Dict(dump_only=True)
    is_paid = fields.Boolean(dump_only=True)
    completed_at = fields.DateTime(dump_only=True)
    expires_at = fields.DateTime(dump_only=True, allow_none=True)
