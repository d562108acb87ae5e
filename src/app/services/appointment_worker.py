from typing import Any, Optional
from uuid import UUID

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.exceptions import SlotAlreadyBookedError
from app.repositories.booking import BookingRepository, booking_repository
from app.schemas.appointment import BookingRequest
from app.services.notification import NotificationService
from app.utils.enums import BookingOutcome


class AppointmentWorker:
    """Обработчик заявок из очереди appointments.

    Для каждой заявки: проверка конфликта, затем вставка записи.
    Проверка чтением только отсекает заведомо занятые слоты, взаимное
    исключение обеспечивает ограничение уникальности в БД. Ни один
    исход не приводит к исключению наружу: задача всегда подтверждается.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository: BookingRepository = booking_repository,
        notifier: Optional[NotificationService] = None,
        engine: Optional[AsyncEngine] = None,
    ) -> None:
        """Инициализация воркера."""
        self.session_factory = session_factory
        self.repository = repository
        self.notifier = notifier
        self.engine = engine

    async def process(
        self,
        payload: dict[str, Any],
        job_id: str = '-',
    ) -> BookingOutcome:
        """Обрабатывает одну заявку и возвращает её итог."""
        with logger.contextualize(request_id=job_id):
            try:
                request = BookingRequest.model_validate(payload)
            except ValidationError:
                logger.opt(exception=True).error(
                    f'Задача {job_id} завершилась ошибкой: некорректная '
                    f'заявка {payload}',
                )
                return BookingOutcome.FAILED
            return await self._commit(request, payload, job_id)

    async def close(self) -> None:
        """Освобождает соединения с БД."""
        if self.engine is not None:
            await self.engine.dispose()

    async def _commit(
        self,
        request: BookingRequest,
        payload: dict[str, Any],
        job_id: str,
    ) -> BookingOutcome:
        try:
            async with self.session_factory() as session:
                existing = await self.repository.find_conflict(
                    session,
                    request.shop_id,
                    request.date,
                    request.hour,
                )
                if existing is not None:
                    return self._skip(job_id, request)
                booking = await self.repository.create_if_absent(
                    session,
                    request,
                )
        except SlotAlreadyBookedError:
            return self._skip(job_id, request)
        except Exception:
            logger.opt(exception=True).error(
                f'Задача {job_id} завершилась ошибкой, заявка: {payload}',
            )
            return BookingOutcome.FAILED

        logger.info(
            f'Задача {job_id} выполнена: запись {booking.id} на '
            f'{request.date} {request.hour:02d}:{request.minute:02d} '
            f'в магазине {request.shop_id}',
        )
        await self._notify(booking.id)
        return BookingOutcome.COMMITTED

    def _skip(self, job_id: str, request: BookingRequest) -> BookingOutcome:
        logger.info(
            f'Задача {job_id} пропущена: слот {request.date} '
            f'{request.hour:02d}:00 магазина {request.shop_id} уже занят',
        )
        return BookingOutcome.SKIPPED_CONFLICT

    async def _notify(self, booking_id: UUID) -> None:
        """Уведомляет клиента о записи, уже зафиксированной в БД.

        Запись перечитывается в отдельной сессии со связями. Ошибки здесь
        только логируются: итог задачи остаётся COMMITTED.
        """
        if self.notifier is None:
            return
        try:
            async with self.session_factory() as session:
                booking = await self.repository.get_with_relations(
                    session,
                    booking_id,
                )
            if booking is None:
                logger.warning(
                    f'Запись {booking_id} не найдена, уведомление не '
                    'отправлено',
                )
                return
            self.notifier.booking_committed(booking)
        except Exception:
            logger.opt(exception=True).error(
                f'Ошибка отправки уведомления о записи {booking_id}',
            )
