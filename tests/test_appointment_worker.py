from __future__ import annotations

import asyncio
import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

from app.core.exceptions import SlotAlreadyBookedError
from app.schemas.appointment import BookingRequest
from app.services.appointment_worker import AppointmentWorker
from app.utils.enums import BookingOutcome
from conftest import fake_session

SHOP_ID = uuid4()
USER_A = uuid4()
USER_B = uuid4()
SLOT_DATE = datetime.date(2024, 6, 1)


class InMemoryBookingStore:
    """Хранилище записей с тем же ключом уникальности, что и в БД.

    Каждая операция уступает управление event loop, чтобы параллельные
    заявки могли пройти проверку до того, как одна из них запишет слот.
    """

    def __init__(self) -> None:
        self.bookings: dict[tuple[UUID, datetime.date, int], SimpleNamespace] = {}
        self.fail_with: Exception | None = None

    async def find_conflict(self, session, shop_id, date, hour, exclude_id=None):
        await asyncio.sleep(0)
        return self.bookings.get((shop_id, date, hour))

    async def create_if_absent(self, session, request):
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with
        key = (request.shop_id, request.date, request.hour)
        if key in self.bookings:
            raise SlotAlreadyBookedError('Time slot already booked')
        booking = SimpleNamespace(
            id=uuid4(),
            user_id=request.user_id,
            shop_id=request.shop_id,
            date=request.date,
            hour=request.hour,
        )
        self.bookings[key] = booking
        return booking

    async def get_with_relations(self, session, booking_id):
        return next(b for b in self.bookings.values() if b.id == booking_id)


def _payload(user_id: UUID, hour: int = 14, minute: int = 0) -> dict:
    return BookingRequest(
        user_id=user_id,
        shop_id=SHOP_ID,
        date=SLOT_DATE,
        hour=hour,
        minute=minute,
        availability_id=uuid4(),
    ).to_payload()


def _worker(store: InMemoryBookingStore, notifier=None) -> AppointmentWorker:
    return AppointmentWorker(fake_session, repository=store, notifier=notifier)


def test_free_slot_is_committed() -> None:
    store = InMemoryBookingStore()

    outcome = asyncio.run(_worker(store).process(_payload(USER_A), 'job-1'))

    assert outcome is BookingOutcome.COMMITTED
    booking = store.bookings[(SHOP_ID, SLOT_DATE, 14)]
    assert booking.user_id == USER_A


def test_taken_slot_is_skipped_on_conflict_check(log_messages) -> None:
    store = InMemoryBookingStore()
    worker = _worker(store)
    asyncio.run(worker.process(_payload(USER_A), 'job-1'))

    outcome = asyncio.run(worker.process(_payload(USER_B), 'job-2'))

    assert outcome is BookingOutcome.SKIPPED_CONFLICT
    assert store.bookings[(SHOP_ID, SLOT_DATE, 14)].user_id == USER_A
    assert any('job-2 пропущена' in m for m in log_messages)


def test_same_hour_with_other_minute_is_a_conflict() -> None:
    store = InMemoryBookingStore()
    worker = _worker(store)
    asyncio.run(worker.process(_payload(USER_A, minute=0), 'job-1'))

    outcome = asyncio.run(worker.process(_payload(USER_B, minute=30), 'job-2'))

    assert outcome is BookingOutcome.SKIPPED_CONFLICT
    assert len(store.bookings) == 1


def test_redelivered_message_is_skipped_and_not_duplicated() -> None:
    store = InMemoryBookingStore()
    worker = _worker(store)
    payload = _payload(USER_A)

    first = asyncio.run(worker.process(payload, 'job-1'))
    second = asyncio.run(worker.process(payload, 'job-1'))

    assert first is BookingOutcome.COMMITTED
    assert second is BookingOutcome.SKIPPED_CONFLICT
    assert len(store.bookings) == 1


def test_order_of_processing_decides_the_winner() -> None:
    for first_user, second_user in ((USER_A, USER_B), (USER_B, USER_A)):
        store = InMemoryBookingStore()
        worker = _worker(store)

        outcomes = [
            asyncio.run(worker.process(_payload(first_user), 'job-1')),
            asyncio.run(worker.process(_payload(second_user), 'job-2')),
        ]

        assert outcomes == [
            BookingOutcome.COMMITTED,
            BookingOutcome.SKIPPED_CONFLICT,
        ]
        assert len(store.bookings) == 1
        assert store.bookings[(SHOP_ID, SLOT_DATE, 14)].user_id == first_user


def test_concurrent_requests_for_one_slot_commit_exactly_once(
    log_messages,
) -> None:
    store = InMemoryBookingStore()
    worker = _worker(store)

    async def run_both() -> list[BookingOutcome]:
        return await asyncio.gather(
            worker.process(_payload(USER_A), 'job-a'),
            worker.process(_payload(USER_B), 'job-b'),
        )

    outcomes = asyncio.run(run_both())

    assert sorted(o.value for o in outcomes) == [
        BookingOutcome.COMMITTED.value,
        BookingOutcome.SKIPPED_CONFLICT.value,
    ]
    assert len(store.bookings) == 1
    assert len([m for m in log_messages if 'пропущена' in m]) == 1


def test_store_error_becomes_failed_outcome(log_messages) -> None:
    store = InMemoryBookingStore()
    store.fail_with = RuntimeError('connection reset')

    outcome = asyncio.run(_worker(store).process(_payload(USER_A), 'job-1'))

    assert outcome is BookingOutcome.FAILED
    assert store.bookings == {}
    assert any('job-1 завершилась ошибкой' in m for m in log_messages)


def test_malformed_payload_becomes_failed_outcome() -> None:
    store = InMemoryBookingStore()

    outcome = asyncio.run(
        _worker(store).process({'userId': 'not-a-uuid'}, 'job-1'),
    )

    assert outcome is BookingOutcome.FAILED
    assert store.bookings == {}


def test_committed_booking_notifies_client() -> None:
    store = InMemoryBookingStore()
    notifier = MagicMock()

    asyncio.run(_worker(store, notifier).process(_payload(USER_A), 'job-1'))

    notifier.booking_committed.assert_called_once()
    booking = notifier.booking_committed.call_args.args[0]
    assert booking.user_id == USER_A


def test_notification_error_does_not_change_outcome() -> None:
    store = InMemoryBookingStore()
    notifier = MagicMock()
    notifier.booking_committed.side_effect = RuntimeError('broker down')

    outcome = asyncio.run(
        _worker(store, notifier).process(_payload(USER_A), 'job-1'),
    )

    assert outcome is BookingOutcome.COMMITTED


def test_skipped_booking_does_not_notify() -> None:
    store = InMemoryBookingStore()
    notifier = MagicMock()
    worker = _worker(store, notifier)
    asyncio.run(worker.process(_payload(USER_A), 'job-1'))
    notifier.reset_mock()

    asyncio.run(worker.process(_payload(USER_B), 'job-2'))

    notifier.booking_committed.assert_not_called()


def test_reload_error_after_commit_keeps_committed_outcome(
    log_messages,
) -> None:
    store = InMemoryBookingStore()
    store.get_with_relations = AsyncMock(
        side_effect=RuntimeError('connection lost'),
    )
    notifier = MagicMock()

    outcome = asyncio.run(
        _worker(store, notifier).process(_payload(USER_A), 'job-1'),
    )

    assert outcome is BookingOutcome.COMMITTED
    assert len(store.bookings) == 1
    notifier.booking_committed.assert_not_called()
    assert not any('завершилась ошибкой' in m for m in log_messages)
    assert any('Ошибка отправки уведомления' in m for m in log_messages)


def test_cancelled_before_notification_is_not_notified() -> None:
    store = InMemoryBookingStore()
    store.get_with_relations = AsyncMock(return_value=None)
    notifier = MagicMock()

    outcome = asyncio.run(
        _worker(store, notifier).process(_payload(USER_A), 'job-1'),
    )

    assert outcome is BookingOutcome.COMMITTED
    notifier.booking_committed.assert_not_called()
