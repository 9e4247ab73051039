"""Tests for the database-backed retry queue."""

from __future__ import annotations

from datetime import timedelta

import pytest

from bizmodel_app.extensions import db
from bizmodel_app.models import RetryJob
from bizmodel_app.services import retry_queue
from bizmodel_app.utils import utcnow


@pytest.fixture()
def handled(monkeypatch):
    """Register a recording handler for the ``test`` job kind."""

    seen = []
    outcomes = {}

    def _handler(payload):
        seen.append(payload["n"])
        outcome = outcomes.get(payload["n"], True)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setitem(retry_queue._HANDLERS, "test", _handler)
    return seen, outcomes


def test_enqueue_and_size(app_with_db):
    job = retry_queue.enqueue("test", {"n": 1}, error="first failure")
    assert job.retry_count == 0
    assert job.last_error == "first failure"
    assert retry_queue.queue_size() == 1


def test_process_in_creation_order(app_with_db, handled):
    seen, _ = handled
    for n in (1, 2, 3):
        retry_queue.enqueue("test", {"n": n})
    counts = retry_queue.process_queue()
    assert counts == {"succeeded": 3, "failed": 0, "expired": 0, "exhausted": 0}
    assert seen == [1, 2, 3]
    assert retry_queue.queue_size() == 0


def test_failed_jobs_stay_queued(app_with_db, handled):
    _, outcomes = handled
    outcomes[1] = False
    outcomes[2] = RuntimeError("still broken")
    retry_queue.enqueue("test", {"n": 1})
    retry_queue.enqueue("test", {"n": 2})

    counts = retry_queue.process_queue()
    assert counts["failed"] == 2
    jobs = RetryJob.query.order_by(RetryJob.id).all()
    assert [job.retry_count for job in jobs] == [1, 1]
    assert jobs[0].last_error == "handler reported failure"
    assert jobs[1].last_error == "still broken"
    assert all(job.last_attempt_at is not None for job in jobs)


def test_exhausted_jobs_are_dropped(app_with_db, handled):
    seen, _ = handled
    job = retry_queue.enqueue("test", {"n": 1})
    job.retry_count = app_with_db.config["RETRY_QUEUE_MAX_RETRIES"]
    db.session.commit()

    counts = retry_queue.process_queue()
    assert counts["exhausted"] == 1
    assert seen == []
    assert retry_queue.queue_size() == 0


def test_expired_jobs_are_dropped(app_with_db, handled):
    seen, _ = handled
    retry_queue.enqueue("test", {"n": 1})
    later = utcnow() + timedelta(hours=app_with_db.config["RETRY_QUEUE_MAX_AGE_HOURS"] + 1)
    counts = retry_queue.process_queue(now=later)
    assert counts["expired"] == 1
    assert seen == []


def test_unknown_kind_counts_as_failure(app_with_db):
    retry_queue.enqueue("mystery", {"n": 1})
    counts = retry_queue.process_queue()
    assert counts["failed"] == 1
    assert RetryJob.query.one().last_error == "no handler registered for mystery"


def test_delay_between_jobs(app_with_db, handled):
    app_with_db.config["RETRY_QUEUE_DELAY_SECONDS"] = 1.5
    sleeps = []
    for n in (1, 2, 3):
        retry_queue.enqueue("test", {"n": n})
    retry_queue.process_queue(sleep=sleeps.append)
    assert sleeps == [1.5, 1.5]


def test_clear_queue(app_with_db):
    retry_queue.enqueue("test", {"n": 1})
    retry_queue.enqueue("test", {"n": 2})
    assert retry_queue.clear_queue() == 2
    assert retry_queue.queue_size() == 0
