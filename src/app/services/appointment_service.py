from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import BadRequestError, NotFoundError
from app.repositories.availability import (
    AvailabilityRepository,
    availability_repository,
)
from app.repositories.shop import ShopRepository, shop_repository
from app.repositories.user import UserRepository, user_repository
from app.schemas.appointment import AppointmentCreate, BookingRequest
from app.services.appointment_queue import AppointmentQueue
from app.utils.validators import parse_time

REQUIRED_FIELDS = ('user_id', 'shop_id', 'date', 'time')


class AppointmentService:
    """Приём заявок на запись: проверка и постановка в очередь.

    Сервис не ждёт итога бронирования. Единственная запись, которую он
    делает, это постановка задачи в очередь.
    """

    def __init__(
        self,
        queue: AppointmentQueue,
        users: UserRepository = user_repository,
        shops: ShopRepository = shop_repository,
        availability: AvailabilityRepository = availability_repository,
    ) -> None:
        """Инициализация сервиса."""
        self.queue = queue
        self.users = users
        self.shops = shops
        self.availability = availability

    async def queue_appointment(
        self,
        session: AsyncSession,
        data: AppointmentCreate,
    ) -> str:
        """Проверяет заявку и ставит её в очередь.

        Публикация в брокер блокирующая и выполняется в пуле потоков.

        Args:
            session: Асинхронная сессия базы данных
            data: Тело запроса клиента

        Returns:
            str: идентификатор задачи в очереди

        Raises:
            BadRequestError: нет обязательных полей, неверное время или
                нет доступности на слот
            NotFoundError: пользователь или магазин не найден
            EnqueueError: брокер недоступен

        """
        if any(getattr(data, field) is None for field in REQUIRED_FIELDS):
            raise BadRequestError(
                'Missing required fields: userId, shopId, date, time',
            )

        user = await self.users.get_by_id(session, data.user_id)
        shop = await self.shops.get_by_id(session, data.shop_id)
        if user is None or shop is None:
            raise NotFoundError('User or shop not found')

        try:
            hour, minute = parse_time(data.time)
        except ValueError as e:
            raise BadRequestError(str(e)) from e

        availability = await self.availability.find_for_slot(
            session,
            data.shop_id,
            data.date,
            hour,
            minute,
        )
        if availability is None or availability.time_slot is None:
            logger.warning(
                f'Нет доступности магазина {data.shop_id} на '
                f'{data.date} {hour:02d}:{minute:02d}',
            )
            raise BadRequestError(
                'No availability found for the given date and time',
            )

        slot = availability.time_slot
        request = BookingRequest(
            user_id=data.user_id,
            shop_id=data.shop_id,
            date=slot.date,
            hour=slot.hour,
            minute=slot.minute,
            availability_id=availability.id,
        )
        return await run_in_threadpool(
            self.queue.enqueue,
            request.to_payload(),
        )
