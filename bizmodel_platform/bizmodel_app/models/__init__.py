"""Database models package."""

from .user import User
from .quiz import AIContent, BusinessModelScore, QuizAttempt, ReportAccess
from .payment import PAYMENT_STATUSES, Payment, Refund
from .email import EmailLog, RetryJob

__all__ = [
    "User",
    "QuizAttempt",
    "BusinessModelScore",
    "ReportAccess",
    "AIContent",
    "Payment",
    "Refund",
    "PAYMENT_STATUSES",
    "EmailLog",
    "RetryJob",
]
