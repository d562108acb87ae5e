import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import (
    BOOKING_UNIQUE_CONSTRAINT,
    UNIQUE_VIOLATION_SQLSTATE,
)
from app.core.exceptions import SlotAlreadyBookedError
from app.models import Availability, Booking
from app.repositories.base import CRUDBase
from app.schemas.appointment import BookingRequest


def is_slot_unique_violation(error: IntegrityError) -> bool:
    """Отличает нарушение уникальности слота от прочих ошибок целостности."""
    orig = error.orig
    sqlstate = getattr(orig, 'sqlstate', None) or getattr(
        orig,
        'pgcode',
        None,
    )
    if sqlstate is not None and sqlstate != UNIQUE_VIOLATION_SQLSTATE:
        return False
    return BOOKING_UNIQUE_CONSTRAINT in str(orig)


class BookingRepository(CRUDBase[Booking, BookingRequest]):
    """Хранилище подтверждённых записей на приём."""

    def __init__(self) -> None:
        """Инициализация репозитория записей."""
        super().__init__(Booking)

    async def find_conflict(
        self,
        session: AsyncSession,
        shop_id: UUID,
        date: datetime.date,
        hour: int,
        exclude_id: Optional[UUID] = None,
    ) -> Optional[Booking]:
        """Ищет запись, которая уже занимает (магазин, дата, час)."""
        predicates = []
        if exclude_id is not None:
            predicates.append(Booking.id != exclude_id)
        return await self.get(
            session,
            *predicates,
            shop_id=shop_id,
            date=date,
            hour=hour,
        )

    async def create_if_absent(
        self,
        session: AsyncSession,
        request: BookingRequest,
    ) -> Booking:
        """Вставляет запись, если слот свободен.

        Фиксация последний шаг: вернувшийся объект уже сохранён в БД.
        id задаётся на стороне приложения, перечитывать строку не нужно.

        Raises:
            SlotAlreadyBookedError: слот занят, о чём сообщила сама БД.
            IntegrityError: прочие нарушения целостности.

        """
        db_obj = self.model(
            user_id=request.user_id,
            shop_id=request.shop_id,
            date=request.date,
            hour=request.hour,
            availability_id=request.availability_id,
        )
        session.add(db_obj)
        await self._commit_guarded(session)
        return db_obj

    async def reschedule(
        self,
        session: AsyncSession,
        db_obj: Booking,
        *,
        shop_id: UUID,
        date: datetime.date,
        hour: int,
    ) -> Booking:
        """Переносит запись; занятость слота проверяет ограничение БД."""
        db_obj.shop_id = shop_id
        db_obj.date = date
        db_obj.hour = hour
        session.add(db_obj)
        await self._commit_guarded(session)
        await session.refresh(db_obj)
        return db_obj

    async def get_with_relations(
        self,
        session: AsyncSession,
        booking_id: UUID,
    ) -> Optional[Booking]:
        """Получает запись со всеми связями."""
        return await self.get(
            session,
            id=booking_id,
            options=self._relations(),
        )

    async def get_multi_with_relations(
        self,
        session: AsyncSession,
        *,
        skip: int = 0,
        limit: int = 100,
        shop_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
    ) -> List[Booking]:
        """Получает список записей со всеми связями."""
        conditions = []
        if shop_id:
            conditions.append(Booking.shop_id == shop_id)
        if user_id:
            conditions.append(Booking.user_id == user_id)
        return await self.get(
            session,
            *conditions,
            many=True,
            order_by=(Booking.date, Booking.hour),
            offset=skip,
            limit=limit,
            options=self._relations(),
        )

    async def _commit_guarded(self, session: AsyncSession) -> None:
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            if is_slot_unique_violation(e):
                raise SlotAlreadyBookedError('Time slot already booked') from e
            raise

    @staticmethod
    def _relations() -> list:
        return [
            selectinload(Booking.user),
            selectinload(Booking.shop),
            selectinload(Booking.availability).selectinload(
                Availability.time_slot,
            ),
        ]


booking_repository = BookingRepository()
