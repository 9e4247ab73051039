"""Signed, URL-safe tokens (email unsubscribe links)."""

from __future__ import annotations

from typing import Any, Dict

from itsdangerous import BadSignature, URLSafeTimedSerializer


def _serializer(secret: str, salt: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=secret, salt=salt)


def sign_payload(secret: str, salt: str, payload: Dict[str, Any]) -> str:
    """Return a signed token for the payload."""

    return _serializer(secret, salt).dumps(payload)


def verify_payload(
    token: str, secret: str, salt: str, *, max_age: int | None = None
) -> Dict[str, Any]:
    """Verify and return the payload.

    Raises `itsdangerous.BadSignature` (or its `SignatureExpired` subclass)
    when the token was tampered with or is older than ``max_age`` seconds.
    """

    return _serializer(secret, salt).loads(token, max_age=max_age)


__all__ = ["BadSignature", "sign_payload", "verify_payload"]
