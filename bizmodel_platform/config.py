"""Application configuration objects."""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from typing import Any, Type

from sqlalchemy.pool import NullPool


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class BaseConfig:
    """Shared defaults across all environments."""

    APP_NAME = "BizModelAI"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite+pysqlite:///bizmodel_dev.db",
    )
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change_me")
    JWT_TOKEN_LOCATION = ("headers", "cookies")
    JWT_ACCESS_COOKIE_NAME = "auth_token"
    JWT_COOKIE_CSRF_PROTECT = _flag("JWT_COOKIE_CSRF_PROTECT", "false")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        seconds=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES_SEC", str(7 * 24 * 3600)))
    )
    GUEST_ATTEMPT_TTL_HOURS = int(os.getenv("GUEST_ATTEMPT_TTL_HOURS", "24"))
    TEMP_USER_TTL_DAYS = int(os.getenv("TEMP_USER_TTL_DAYS", "90"))
    REPORT_UNLOCK_PRICE_CENTS = int(os.getenv("REPORT_UNLOCK_PRICE_CENTS", "999"))
    REPORT_UNLOCK_REPEAT_PRICE_CENTS = int(
        os.getenv("REPORT_UNLOCK_REPEAT_PRICE_CENTS", "499")
    )
    PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "usd")
    STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")
    STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET", "")
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY") or os.getenv("AI_API_KEY", "")
    AI_API_BASE = os.getenv("AI_API_BASE", "https://api.openai.com/v1")
    AI_API_MAX_RETRIES = int(os.getenv("AI_API_MAX_RETRIES", "3"))
    AI_API_RETRY_BACKOFF = float(os.getenv("AI_API_RETRY_BACKOFF", "2.0"))
    AI_CONNECT_TIMEOUT_SEC = int(os.getenv("AI_CONNECT_TIMEOUT_SEC", "15"))
    AI_READ_TIMEOUT_SEC = int(os.getenv("AI_READ_TIMEOUT_SEC", "60"))
    AI_CONTENT_MODEL = os.getenv("AI_CONTENT_MODEL", "gpt-4o-mini")
    AI_CONTENT_ENABLE = _flag("AI_CONTENT_ENABLE", "true")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    RATE_LIMIT_DEFAULTS = [
        limit.strip()
        for limit in os.getenv("RATE_LIMIT_DEFAULTS", "200 per minute;2000 per day").split(";")
        if limit.strip()
    ]
    EMAIL_RATE_LIMIT = os.getenv("EMAIL_RATE_LIMIT", "10 per minute")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", os.getenv("FRONTEND_URL", "http://localhost:5173"))
    JSON_SORT_KEYS = False
    FRONTEND_URL = os.getenv("FRONTEND_URL", "https://bizmodelai.com")
    ADMIN_DEFAULT_EMAIL = os.getenv("ADMIN_DEFAULT_EMAIL", "admin@example.com")
    ADMIN_DEFAULT_PASSWORD = os.getenv("ADMIN_DEFAULT_PASSWORD", "AdminPass123!")
    ADMIN_AUTO_SEED = _flag("ADMIN_AUTO_SEED", "true")
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.resend.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = _flag("MAIL_USE_TLS", "true")
    MAIL_USE_SSL = _flag("MAIL_USE_SSL", "false")
    MAIL_ENABLED = _flag("MAIL_ENABLED", "true")
    MAIL_TIMEOUT = int(os.getenv("MAIL_TIMEOUT", "30"))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "team@bizmodelai.com")
    MAIL_DEFAULT_NAME = os.getenv("MAIL_DEFAULT_NAME", "BizModelAI")
    MAIL_REPLY_TO = os.getenv("MAIL_REPLY_TO", "")
    CONTACT_INBOX = os.getenv("CONTACT_INBOX", "team@bizmodelai.com")
    EMAIL_COOLDOWN_SECONDS = int(os.getenv("EMAIL_COOLDOWN_SECONDS", "60"))
    EMAIL_EXTENDED_COOLDOWN_SECONDS = int(os.getenv("EMAIL_EXTENDED_COOLDOWN_SECONDS", "300"))
    EMAIL_INITIAL_LIMIT = int(os.getenv("EMAIL_INITIAL_LIMIT", "5"))
    UNSUBSCRIBE_SECRET = os.getenv("UNSUBSCRIBE_SECRET") or JWT_SECRET_KEY
    UNSUBSCRIBE_SALT = os.getenv("UNSUBSCRIBE_SALT", "email-unsubscribe")
    PASSWORD_RESET_URL = os.getenv("PASSWORD_RESET_URL", f"{FRONTEND_URL}/reset-password")
    PASSWORD_RESET_TTL_MINUTES = int(os.getenv("PASSWORD_RESET_TTL_MINUTES", "60"))
    RETRY_QUEUE_MAX_RETRIES = int(os.getenv("RETRY_QUEUE_MAX_RETRIES", "5"))
    RETRY_QUEUE_MAX_AGE_HOURS = int(os.getenv("RETRY_QUEUE_MAX_AGE_HOURS", "24"))
    RETRY_QUEUE_DELAY_SECONDS = float(os.getenv("RETRY_QUEUE_DELAY_SECONDS", "2.0"))
    SQLITE_TIMEOUT_SEC = int(os.getenv("SQLITE_TIMEOUT_SEC", "15"))
    SQLITE_BUSY_TIMEOUT_MS = int(os.getenv("SQLITE_BUSY_TIMEOUT_MS", "15000"))
    if SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS = {
            "poolclass": NullPool,
            "connect_args": {"timeout": SQLITE_TIMEOUT_SEC, "check_same_thread": False},
        }
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {
            "pool_pre_ping": True,
            "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
            "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "10")),
            "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", "30")),
        }


class DevConfig(BaseConfig):
    DEBUG = True


class ProdConfig(BaseConfig):
    DEBUG = False


class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite+pysqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
    }
    JWT_SECRET_KEY = "test-secret"
    UNSUBSCRIBE_SECRET = "test-unsubscribe-secret"
    MAIL_ENABLED = False
    AI_CONTENT_ENABLE = False
    STRIPE_SECRET_KEY = ""
    STRIPE_WEBHOOK_SECRET = ""
    RATELIMIT_ENABLED = False
    RETRY_QUEUE_DELAY_SECONDS = 0.0
    ADMIN_AUTO_SEED = False


CONFIG_ALIASES: dict[str, Type[BaseConfig]] = {
    "dev": DevConfig,
    "development": DevConfig,
    "prod": ProdConfig,
    "production": ProdConfig,
    "test": TestConfig,
    "testing": TestConfig,
}


@lru_cache
def resolve_config(name_or_class: Any) -> Any:
    """Resolve config argument to the object expected by `app.config.from_object`."""

    if name_or_class is None:
        return DevConfig
    if isinstance(name_or_class, str):
        return CONFIG_ALIASES.get(name_or_class, name_or_class)
    return name_or_class
