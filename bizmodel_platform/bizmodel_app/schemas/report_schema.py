"""Schemas for report access and AI content payloads."""

from __future__ import annotations

from marshmallow import Schema, fields


class ReportAccessSchema(Schema):
    report_type = fields.String(dump_only=True)
    is_unlocked = fields.Boolean(dump_only=True)
    unlocked_by = fields.String(dump_only=True)
    unlocked_at = fields.DateTime(dump_only=True, allow_none=True)
    expires_at = fields.DateTime(dump_only=True, allow_none=True)


class AIContentSchema(Schema):
    quiz_attempt_id = fields.Integer(dump_only=True)
    content_type = fields.String(dump_only=True)
    content = fields.Raw(dump_only=True)
    content_hash = fields.String(dump_only=True)
    source = fields.String(dump_only=True)
    generated_at = fields.DateTime(dump_only=True)


class AIContentSaveSchema(Schema):
    content = fields.Raw(required=True)


class AIContentGenerateSchema(Schema):
    force = fields.Boolean(load_default=False)
