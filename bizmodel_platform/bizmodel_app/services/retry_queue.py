"""Database-backed retry queue for work that failed on the first try.

Jobs are processed one at a time in creation order. A job that fails stays
queued with its retry count increased; jobs that exceed the retry cap or
the maximum age are dropped without being run again.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta
from typing import Any, Callable, Dict

from flask import current_app

from ..extensions import db
from ..metrics import set_retry_queue_size
from ..models import RetryJob
from ..utils.clock import coerce_aware, utcnow

Handler = Callable[[Dict[str, Any]], bool]

_HANDLERS: Dict[str, Handler] = {}


def register_handler(kind: str, handler: Handler) -> None:
    _HANDLERS[kind] = handler


def get_handler(kind: str) -> Handler | None:
    return _HANDLERS.get(kind)


def enqueue(kind: str, payload: Dict[str, Any], *, error: str | None = None) -> RetryJob:
    job = RetryJob(kind=kind, payload=payload, retry_count=0, last_error=error)
    db.session.add(job)
    db.session.commit()
    set_retry_queue_size(queue_size())
    current_app.logger.info("Queued %s job %s for retry", kind, job.id)
    return job


def queue_size() -> int:
    return RetryJob.query.count()


def clear_queue() -> int:
    removed = RetryJob.query.delete()
    db.session.commit()
    set_retry_queue_size(0)
    return removed


def process_queue(
    now: datetime | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, int]:
    config = current_app.config
    max_retries = int(config.get("RETRY_QUEUE_MAX_RETRIES", 5))
    max_age = timedelta(hours=config.get("RETRY_QUEUE_MAX_AGE_HOURS", 24))
    delay = float(config.get("RETRY_QUEUE_DELAY_SECONDS", 2.0))
    now = now or utcnow()

    counts = {"succeeded": 0, "failed": 0, "expired": 0, "exhausted": 0}
    jobs = RetryJob.query.order_by(RetryJob.created_at.asc(), RetryJob.id.asc()).all()
    processed = 0
    for job in jobs:
        if job.retry_count >= max_retries:
            current_app.logger.warning("Dropping %s job %s after %s retries", job.kind, job.id, job.retry_count)
            db.session.delete(job)
            counts["exhausted"] += 1
            db.session.commit()
            continue
        if now - coerce_aware(job.created_at) > max_age:
            current_app.logger.warning("Dropping expired %s job %s", job.kind, job.id)
            db.session.delete(job)
            counts["expired"] += 1
            db.session.commit()
            continue

        if processed and delay > 0:
            sleep(delay)
        processed += 1

        handler = get_handler(job.kind)
        if handler is None:
            ok, error = False, f"no handler registered for {job.kind}"
        else:
            try:
                ok, error = bool(handler(job.payload)), None
            except Exception as exc:  # handler errors keep the job queued
                db.session.rollback()
                ok, error = False, str(exc)
        job.last_attempt_at = now
        if ok:
            db.session.delete(job)
            counts["succeeded"] += 1
        else:
            job.retry_count += 1
            job.last_error = error or "handler reported failure"
            counts["failed"] += 1
            current_app.logger.warning(
                "Retry of %s job %s failed (%s/%s): %s",
                job.kind,
                job.id,
                job.retry_count,
                max_retries,
                job.last_error,
            )
        db.session.commit()

    db.session.commit()
    set_retry_queue_size(queue_size())
    return counts
