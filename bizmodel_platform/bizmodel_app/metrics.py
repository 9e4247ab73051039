"""Prometheus metrics helpers."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST

REQUEST_COUNT = Counter(
    "bizmodel_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "bizmodel_request_latency_seconds",
    "Latency of HTTP requests in seconds",
    ["endpoint"],
)
QUIZ_SUBMISSIONS = Counter(
    "bizmodel_quiz_submissions_total",
    "Quiz attempts stored",
    ["audience"],
)
PAYMENT_EVENTS = Counter(
    "bizmodel_payment_events_total",
    "Payment lifecycle transitions",
    ["status"],
)
EMAILS = Counter(
    "bizmodel_emails_total",
    "Outgoing email outcomes",
    ["email_type", "status"],
)
RETRY_QUEUE_SIZE = Gauge(
    "bizmodel_retry_queue_size",
    "Jobs waiting in the retry queue",
)


def record_request(method: str, endpoint: str, status: int, latency: float) -> None:
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(latency)


def record_quiz_submission(audience: str) -> None:
    QUIZ_SUBMISSIONS.labels(audience=audience).inc()


def record_payment_event(status: str) -> None:
    PAYMENT_EVENTS.labels(status=status).inc()


def record_email(email_type: str, status: str) -> None:
    EMAILS.labels(email_type=email_type, status=status).inc()


def set_retry_queue_size(size: int) -> None:
    RETRY_QUEUE_SIZE.set(size)


def latest_metrics() -> tuple[bytes, str]:
    data = generate_latest()
    return data, CONTENT_TYPE_LATEST
