from __future__ import annotations

import asyncio
import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import SlotAlreadyBookedError
from app.repositories.booking import booking_repository, is_slot_unique_violation
from app.schemas.appointment import BookingRequest


class FakeDriverError(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity_error(message: str, sqlstate: str) -> IntegrityError:
    return IntegrityError(
        'INSERT INTO booking ...',
        {},
        FakeDriverError(message, sqlstate),
    )


SLOT_TAKEN = _integrity_error(
    'duplicate key value violates unique constraint '
    '"uq_booking_shop_date_hour"',
    '23505',
)
FK_VIOLATION = _integrity_error(
    'insert or update on table "booking" violates foreign key constraint '
    '"booking_user_id_fkey"',
    '23503',
)
OTHER_UNIQUE = _integrity_error(
    'duplicate key value violates unique constraint "booking_pkey"',
    '23505',
)


def _session(commit_error: Exception | None = None) -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock(side_effect=commit_error)
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


def _request() -> BookingRequest:
    return BookingRequest(
        user_id=uuid4(),
        shop_id=uuid4(),
        date=datetime.date(2024, 6, 1),
        hour=14,
        minute=0,
        availability_id=uuid4(),
    )


def test_slot_violation_is_recognized() -> None:
    assert is_slot_unique_violation(SLOT_TAKEN)
    assert not is_slot_unique_violation(FK_VIOLATION)
    assert not is_slot_unique_violation(OTHER_UNIQUE)


def test_insert_into_taken_slot_raises_slot_already_booked() -> None:
    session = _session(SLOT_TAKEN)

    with pytest.raises(SlotAlreadyBookedError):
        asyncio.run(booking_repository.create_if_absent(session, _request()))

    session.rollback.assert_awaited_once()
    session.refresh.assert_not_awaited()


def test_other_integrity_errors_are_not_conflicts() -> None:
    session = _session(FK_VIOLATION)

    with pytest.raises(IntegrityError):
        asyncio.run(booking_repository.create_if_absent(session, _request()))

    session.rollback.assert_awaited_once()


def test_insert_into_free_slot_returns_booking() -> None:
    session = _session()
    request = _request()

    booking = asyncio.run(
        booking_repository.create_if_absent(session, request),
    )

    assert booking.shop_id == request.shop_id
    assert (booking.date, booking.hour) == (request.date, request.hour)
    session.add.assert_called_once_with(booking)
    session.commit.assert_awaited_once_with()
    session.refresh.assert_not_awaited()
