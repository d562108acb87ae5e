from __future__ import annotations

import asyncio
import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from celery.utils.time import get_exponential_backoff_interval
from fastapi_mail.errors import ConnectionErrors

from app.core.constants import CREATE_APPOINTMENT_TASK, SEND_NOTIFICATION_TASK
from app.schemas.appointment import BookingRequest
from app.services.appointment_worker import AppointmentWorker
from app.utils.enums import BookingOutcome
from celery_app.main import celery_app
from celery_app.tasks import AppointmentTask, NotificationTask
from conftest import fake_session


@pytest.fixture
def appointment_task():
    task = celery_app.tasks[CREATE_APPOINTMENT_TASK]
    assert isinstance(task, AppointmentTask)
    yield task
    task._worker = None


def _payload() -> dict:
    return BookingRequest(
        user_id=uuid4(),
        shop_id=uuid4(),
        date=datetime.date(2024, 6, 1),
        hour=14,
        minute=0,
        availability_id=uuid4(),
    ).to_payload()


def test_broker_acks_only_after_processing() -> None:
    assert celery_app.conf.task_acks_late is True
    assert celery_app.conf.task_reject_on_worker_lost is True
    assert celery_app.conf.worker_prefetch_multiplier == 1


def test_tasks_are_routed_to_their_queues() -> None:
    routes = celery_app.conf.task_routes

    assert routes[CREATE_APPOINTMENT_TASK] == {'queue': 'appointments'}
    assert routes[SEND_NOTIFICATION_TASK] == {'queue': 'default'}


def test_appointment_task_is_never_retried(appointment_task) -> None:
    assert appointment_task.max_retries == 0
    assert not getattr(appointment_task, 'autoretry_for', ())
    assert appointment_task.acks_late is True
    assert appointment_task.reject_on_worker_lost is True
    assert appointment_task.ignore_result is True


def test_notification_task_retries_with_exponential_backoff() -> None:
    task = celery_app.tasks[SEND_NOTIFICATION_TASK]
    assert isinstance(task, NotificationTask)

    assert task.max_retries == 5
    assert ConnectionErrors in task.autoretry_for
    assert OSError in task.autoretry_for
    assert task.retry_jitter is False
    delays = [
        get_exponential_backoff_interval(
            factor=task.retry_backoff,
            retries=attempt,
            maximum=getattr(task, 'retry_backoff_max', 600),
            full_jitter=task.retry_jitter,
        )
        for attempt in range(task.max_retries)
    ]
    assert delays == [1, 2, 4, 8, 16]


def test_appointment_task_returns_worker_outcome(appointment_task) -> None:
    worker = MagicMock()
    worker.process = AsyncMock(return_value=BookingOutcome.SKIPPED_CONFLICT)
    appointment_task._worker = worker
    payload = _payload()

    assert appointment_task.run(payload) == 'SKIPPED_CONFLICT'
    assert worker.process.await_args.args == (payload,)


def test_appointment_task_does_not_raise_on_store_error(
    appointment_task,
) -> None:
    store = MagicMock()
    store.find_conflict = AsyncMock(side_effect=RuntimeError('db down'))
    appointment_task._worker = AppointmentWorker(fake_session, repository=store)

    assert appointment_task.run(_payload()) == 'FAILED'


def test_closing_appointment_task_disposes_worker(appointment_task) -> None:
    worker = MagicMock()
    worker.close = AsyncMock()
    appointment_task._worker = worker

    asyncio.run(appointment_task.close_worker())

    worker.close.assert_awaited_once_with()
    assert appointment_task._worker is None


def test_exhausted_notification_is_dead_lettered(log_messages) -> None:
    task = celery_app.tasks[SEND_NOTIFICATION_TASK]
    assert isinstance(task, NotificationTask)

    task.on_failure(
        OSError('smtp down'),
        'job-9',
        (),
        {'emails': ['client@example.com']},
        None,
    )

    assert any(
        'job-9' in m and 'dead-letter' in m and 'smtp down' in m
        for m in log_messages
    )
