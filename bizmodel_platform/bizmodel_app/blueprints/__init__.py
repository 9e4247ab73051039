"""REST API blueprints (auth, quiz, reports, payments, etc.)."""

from __future__ import annotations

from .admin_bp import admin_bp
from .ai_bp import ai_bp
from .auth_bp import auth_bp
from .email_bp import email_bp
from .metrics_bp import metrics_bp
from .payment_bp import payment_bp
from .quiz_bp import quiz_bp
from .report_bp import report_bp
from .scoring_bp import scoring_bp

BLUEPRINTS = (
    (auth_bp, "/api/auth"),
    (scoring_bp, "/api/scoring"),
    (quiz_bp, "/api/quiz"),
    (report_bp, "/api/reports"),
    (payment_bp, "/api/payments"),
    (ai_bp, "/api/ai"),
    (email_bp, "/api/email"),
    (admin_bp, "/api/admin"),
    (metrics_bp, ""),
)

__all__ = [
    "BLUEPRINTS",
    "admin_bp",
    "ai_bp",
    "auth_bp",
    "email_bp",
    "metrics_bp",
    "payment_bp",
    "quiz_bp",
    "report_bp",
    "scoring_bp",
]
