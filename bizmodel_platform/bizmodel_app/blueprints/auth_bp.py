"""Authentication endpoints (register/login/me/password reset)."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from werkzeug.exceptions import BadRequest

from ..errors import EmailRateLimited
from ..extensions import db, limiter
from ..models import User
from ..schemas import (
    LoginSchema,
    PasswordChangeSchema,
    PasswordResetConfirmSchema,
    PasswordResetRequestSchema,
    RegisterSchema,
    UpdateProfileSchema,
    UserSchema,
)
from ..services import email_service, password_reset_service, quiz_service
from ..utils import generate_access_token, hash_password, verify_password
from .common import register_error_handlers

auth_bp = Blueprint("auth_bp", __name__)
register_error_handlers(auth_bp)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()
update_profile_schema = UpdateProfileSchema()
password_change_schema = PasswordChangeSchema()
password_reset_request_schema = PasswordResetRequestSchema()
password_reset_confirm_schema = PasswordResetConfirmSchema()


def _email_limit():
    return current_app.config.get("EMAIL_RATE_LIMIT", "10 per minute")


@auth_bp.get("/ping")
def ping():
    return jsonify({"module": "auth", "status": "ok"})


@auth_bp.post("/register")
def register():
    payload = register_schema.load(request.get_json() or {})
    email = payload["email"].strip().lower()
    user = User.query.filter_by(email=email).first()

    if user and not user.is_temporary:
        return jsonify({"message": "Email already registered"}), HTTPStatus.CONFLICT

    if user:
        quiz_service.convert_temporary_user(
            user,
            payload["password"],
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
        )
    else:
        user = User(
            email=email,
            password_hash=hash_password(payload["password"]),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            role="user",
        )
        db.session.add(user)
        db.session.commit()

    try:
        email_service.send_welcome_email(user)
    except EmailRateLimited:
        current_app.logger.info("Welcome email for user %s skipped by rate limit", user.id)

    return (
        jsonify({"access_token": generate_access_token(user), "user": user_schema.dump(user)}),
        HTTPStatus.CREATED,
    )


@auth_bp.post("/login")
def login():
    payload = login_schema.load(request.get_json() or {})
    user = User.query.filter_by(email=payload["email"].strip().lower()).first()
    if not user or not verify_password(payload["password"], user.password_hash):
        return jsonify({"message": "Invalid email or password"}), HTTPStatus.UNAUTHORIZED
    return jsonify({"access_token": generate_access_token(user), "user": user_schema.dump(user)})


@auth_bp.get("/me")
@jwt_required()
def me():
    return jsonify({"user": user_schema.dump(current_user)})


@auth_bp.patch("/me")
@jwt_required()
def update_me():
    payload = update_profile_schema.load(request.get_json() or {})
    if not payload:
        return jsonify({"message": "No changes supplied"}), HTTPStatus.BAD_REQUEST
    for field, value in payload.items():
        setattr(current_user, field, value)
    db.session.commit()
    return jsonify({"user": user_schema.dump(current_user)})


@auth_bp.post("/password")
@jwt_required()
def change_password():
    payload = password_change_schema.load(request.get_json() or {})
    if not verify_password(payload["current_password"], current_user.password_hash):
        return jsonify({"message": "Incorrect current password"}), HTTPStatus.BAD_REQUEST
    current_user.password_hash = hash_password(payload["new_password"])
    db.session.commit()
    return jsonify({"message": "Password updated"})


@auth_bp.post("/password/forgot")
@limiter.limit(_email_limit)
def password_forgot():
    payload = password_reset_request_schema.load(request.get_json() or {})
    try:
        password_reset_service.request_password_reset(payload["email"])
    except BadRequest as exc:
        return jsonify({"message": exc.description}), HTTPStatus.BAD_REQUEST
    return jsonify({"message": "If that email has an account, a reset link is on its way."})


@auth_bp.post("/password/reset")
def password_reset():
    payload = password_reset_confirm_schema.load(request.get_json() or {})
    try:
        user = password_reset_service.confirm_password_reset(payload["token"], payload["new_password"])
    except BadRequest as exc:
        return jsonify({"message": exc.description}), HTTPStatus.BAD_REQUEST
    return jsonify({"user": user_schema.dump(user)})
