"""Business logic modules (scoring, reports, payments, email, etc.)."""

from . import (
    business_catalog,
    scoring_service,
    personality_service,
    score_store,
    report_access_service,
    quiz_service,
    payment_service,
    ai_client,
    ai_content_service,
    mail_service,
    email_service,
    retry_queue,
    retention_service,
    password_reset_service,
)

__all__ = [
    "business_catalog",
    "scoring_service",
    "personality_service",
    "score_store",
    "report_access_service",
    "quiz_service",
    "payment_service",
    "ai_client",
    "ai_content_service",
    "mail_service",
    "email_service",
    "retry_queue",
    "retention_service",
    "password_reset_service",
]
