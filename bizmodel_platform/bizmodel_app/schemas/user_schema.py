"""Schemas for user-related payloads."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

ROLE_CHOICES = ("user", "admin")


class RegisterSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=8))
    first_name = fields.String(validate=validate.Length(max=120))
    last_name = fields.String(validate=validate.Length(max=120))

    class Meta:
        unknown = EXCLUDE


class LoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True)


class UserSchema(Schema):
    id = fields.Integer(dump_only=True)
    email = fields.Email(dump_only=True)
    first_name = fields.String(dump_only=True, allow_none=True)
    last_name = fields.String(dump_only=True, allow_none=True)
    role = fields.String(dump_only=True)
    is_paid = fields.Boolean(dump_only=True)
    is_temporary = fields.Boolean(dump_only=True)
    is_unsubscribed = fields.Boolean(dump_only=True)
    created_at = fields.DateTime(dump_only=True)


class UpdateProfileSchema(Schema):
    first_name = fields.String(validate=validate.Length(max=120))
    last_name = fields.String(validate=validate.Length(max=120))


class PasswordChangeSchema(Schema):
    current_password = fields.String(required=True)
    new_password = fields.String(required=True, validate=validate.Length(min=8))


class PasswordResetRequestSchema(Schema):
    email = fields.Email(required=True)


class PasswordResetConfirmSchema(Schema):
    token = fields.String(required=True, validate=validate.Length(min=10))
    new_password = fields.String(required=True, validate=validate.Length(min=8))
