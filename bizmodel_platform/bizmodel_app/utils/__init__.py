"""Utility helpers (security, signed tokens, time)."""

from .clock import coerce_aware, utcnow
from .security import generate_access_token, hash_password, verify_password

__all__ = [
    "coerce_aware",
    "generate_access_token",
    "hash_password",
    "utcnow",
    "verify_password",
]
