"""Schemas for email-sending endpoints."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class QuizResultsEmailSchema(Schema):
    quiz_attempt_id = fields.Integer(required=True, validate=validate.Range(min=1))
    email = fields.Email(required=True)

    class Meta:
        unknown = EXCLUDE


class FullReportEmailSchema(QuizResultsEmailSchema):
    pass


class ContactFormSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=True)
    subject = fields.String(required=True, validate=validate.Length(min=1, max=200))
    message = fields.String(required=True, validate=validate.Length(min=1, max=5000))
    category = fields.String(
        load_default="general",
        validate=validate.OneOf(("general", "support", "billing", "partnership", "feedback")),
    )


class UnsubscribeSchema(Schema):
    token = fields.String(required=True, validate=validate.Length(min=10))
