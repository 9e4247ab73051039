"""Serialization / validation schemas (Marshmallow)."""

from .user_schema import (
    LoginSchema,
    PasswordChangeSchema,
    PasswordResetConfirmSchema,
    PasswordResetRequestSchema,
    RegisterSchema,
    UpdateProfileSchema,
    UserSchema,
)
from .quiz_schema import (
    ModelMatchSchema,
    QuizAnswersSchema,
    QuizAttemptSchema,
    QuizSubmissionSchema,
)
from .payment_schema import (
    PaymentListQuerySchema,
    PaymentSchema,
    RefundCreateSchema,
    RefundSchema,
    ReportUnlockSchema,
)
from .email_schema import (
    ContactFormSchema,
    FullReportEmailSchema,
    QuizResultsEmailSchema,
    UnsubscribeSchema,
)
from .report_schema import (
    AIContentGenerateSchema,
    AIContentSaveSchema,
    AIContentSchema,
    ReportAccessSchema,
)

__all__ = [
    "LoginSchema",
    "PasswordChangeSchema",
    "PasswordResetConfirmSchema",
    "PasswordResetRequestSchema",
    "RegisterSchema",
    "UpdateProfileSchema",
    "UserSchema",
    "ModelMatchSchema",
    "QuizAnswersSchema",
    "QuizAttemptSchema",
    "QuizSubmissionSchema",
    "PaymentListQuerySchema",
    "PaymentSchema",
    "RefundCreateSchema",
    "RefundSchema",
    "ReportUnlockSchema",
    "ContactFormSchema",
    "FullReportEmailSchema",
    "QuizResultsEmailSchema",
    "UnsubscribeSchema",
    "AIContentGenerateSchema",
    "AIContentSaveSchema",
    "AIContentSchema",
    "ReportAccessSchema",
]
