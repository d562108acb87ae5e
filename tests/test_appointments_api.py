from __future__ import annotations

import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.core.db import get_async_session
from app.core.dependencies import get_appointment_service
from app.core.exceptions import EnqueueError
from app.main import app
from app.services.appointment_service import AppointmentService

USER_ID = uuid4()
SHOP_ID = uuid4()
BODY = {
    'userId': str(USER_ID),
    'shopId': str(SHOP_ID),
    'date': '2024-06-01',
    'time': '14:00',
}


async def _session():
    yield MagicMock()


def _service(*, user=True, availability=True) -> AppointmentService:
    queue = MagicMock()
    queue.enqueue.return_value = 'job-1'
    users = MagicMock()
    users.get_by_id = AsyncMock(
        return_value=SimpleNamespace(id=USER_ID) if user else None,
    )
    shops = MagicMock()
    shops.get_by_id = AsyncMock(return_value=SimpleNamespace(id=SHOP_ID))
    slots = MagicMock()
    slots.find_for_slot = AsyncMock(
        return_value=SimpleNamespace(
            id=uuid4(),
            time_slot=SimpleNamespace(
                date=datetime.date(2024, 6, 1),
                hour=14,
                minute=0,
            ),
        )
        if availability
        else None,
    )
    return AppointmentService(queue, users, shops, slots)


@pytest.fixture
def client_for():
    def build(service: AppointmentService) -> TestClient:
        app.dependency_overrides[get_async_session] = _session
        app.dependency_overrides[get_appointment_service] = lambda: service
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


def test_accepted_request_is_queued(client_for) -> None:
    service = _service()

    response = client_for(service).post('/appointments/', json=BODY)

    assert response.status_code == 201
    assert response.json() == {'message': 'Appointment queued successfully'}
    service.queue.enqueue.assert_called_once()
    assert 'X-Request-ID' in response.headers


def test_missing_fields_return_400(client_for) -> None:
    service = _service()

    response = client_for(service).post(
        '/appointments/',
        json={'userId': str(USER_ID)},
    )

    assert response.status_code == 400
    assert response.json() == {
        'code': 400,
        'detail': 'Missing required fields: userId, shopId, date, time',
    }
    service.queue.enqueue.assert_not_called()


def test_unknown_user_returns_404(client_for) -> None:
    service = _service(user=False)

    response = client_for(service).post('/appointments/', json=BODY)

    assert response.status_code == 404
    assert response.json()['detail'] == 'User or shop not found'


def test_zero_availability_returns_400_and_nothing_is_queued(
    client_for,
) -> None:
    service = _service(availability=False)

    response = client_for(service).post('/appointments/', json=BODY)

    assert response.status_code == 400
    assert response.json()['detail'] == (
        'No availability found for the given date and time'
    )
    service.queue.enqueue.assert_not_called()


def test_bad_time_returns_400(client_for) -> None:
    service = _service()

    response = client_for(service).post(
        '/appointments/',
        json={**BODY, 'time': '25:99'},
    )

    assert response.status_code == 400
    service.queue.enqueue.assert_not_called()


def test_queue_failure_returns_500(client_for) -> None:
    service = _service()
    service.queue.enqueue.side_effect = EnqueueError(
        'Failed to queue appointment',
    )

    response = client_for(service).post('/appointments/', json=BODY)

    assert response.status_code == 500
    assert response.json() == {
        'code': 500,
        'detail': 'Failed to queue appointment',
    }


def test_malformed_identifier_is_a_validation_error(client_for) -> None:
    service = _service()

    response = client_for(service).post(
        '/appointments/',
        json={**BODY, 'userId': 'not-a-uuid'},
    )

    assert response.status_code == 422
    assert response.json()['code'] == 422
    service.queue.enqueue.assert_not_called()
