"""Domain exceptions shared by services and blueprints."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class DomainError(Exception):
    """Base error carrying a machine-readable code and optional payload."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, code: str, message: str | None = None, **payload: Any):
        super().__init__(message or code)
        self.code = code
        self.message = message or code
        self.payload = payload

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.code, "message": self.message}
        body.update(self.payload)
        return body


class PaymentError(DomainError):
    status = HTTPStatus.BAD_REQUEST


class AccountExists(DomainError):
    status = HTTPStatus.CONFLICT

    def __init__(self, email: str):
        super().__init__(
            "login_required",
            "An account already exists for this email; log in to continue",
            email=email,
        )


class ReportLocked(DomainError):
    status = HTTPStatus.PAYMENT_REQUIRED

    def __init__(self, report_type: str, quiz_attempt_id: int | None = None):
        super().__init__(
            "report_locked",
            f"Report '{report_type}' is locked",
            report_type=report_type,
            quiz_attempt_id=quiz_attempt_id,
        )


class AIContentError(DomainError):
    status = HTTPStatus.BAD_GATEWAY


class EmailRateLimited(DomainError):
    status = HTTPStatus.TOO_MANY_REQUESTS

    def __init__(self, remaining_seconds: int, limit_type: str):
        super().__init__(
            "rate_limited",
            f"Please wait {remaining_seconds} seconds before requesting another email",
            rate_limit={"remaining_seconds": remaining_seconds, "type": limit_type},
        )
