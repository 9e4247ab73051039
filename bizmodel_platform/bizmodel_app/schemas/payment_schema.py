"""Schemas for report-unlock payments and refunds."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from ..models import PAYMENT_STATUSES


class ReportUnlockSchema(Schema):
    quiz_attempt_id = fields.Integer(required=True, validate=validate.Range(min=1))


class RefundSchema(Schema):
    id = fields.Integer(dump_only=True)
    amount_cents = fields.Integer(dump_only=True)
    currency = fields.String(dump_only=True)
    reason = fields.String(dump_only=True, allow_none=True)
    status = fields.String(dump_only=True)
    stripe_refund_id = fields.String(dump_only=True, allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    processed_at = fields.DateTime(dump_only=True, allow_none=True)


class PaymentSchema(Schema):
    id = fields.Integer(dump_only=True)
    user_id = fields.Integer(dump_only=True)
    quiz_attempt_id = fields.Integer(dump_only=True, allow_none=True)
    amount_cents = fields.Integer(dump_only=True)
    currency = fields.String(dump_only=True)
    type = fields.String(dump_only=True)
    status = fields.String(dump_only=True)
    stripe_payment_intent_id = fields.String(dump_only=True, allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    completed_at = fields.DateTime(dump_only=True, allow_none=True)
    refunded_cents = fields.Integer(dump_only=True)
    refunds = fields.List(fields.Nested(RefundSchema), dump_only=True)


class RefundCreateSchema(Schema):
    amount_cents = fields.Integer(validate=validate.Range(min=1))
    reason = fields.String(validate=validate.Length(max=255), load_default="requested_by_customer")


class PaymentListQuerySchema(Schema):
    status = fields.String(validate=validate.OneOf(PAYMENT_STATUSES))
    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    per_page = fields.Integer(load_default=20, validate=validate.Range(min=1, max=100))
