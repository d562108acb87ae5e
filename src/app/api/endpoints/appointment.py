from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from loguru import logger

from app.core.db import DbSession
from app.core.dependencies import AppointmentServiceDep
from app.core.exceptions import (
    BadRequestError,
    EnqueueError,
    NotFoundError,
    SlotAlreadyBookedError,
)
from app.repositories.booking import booking_repository
from app.schemas.appointment import (
    AppointmentCreate,
    AppointmentInfo,
    AppointmentQueued,
    AppointmentUpdate,
)
from app.schemas.common import ErrorResponse
from app.utils.http import http_error
from app.utils.logging_decorator import event_logger

router = APIRouter(prefix='/appointments', tags=['Записи'])


@router.post(
    '/',
    response_model=AppointmentQueued,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': ErrorResponse},
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def create_appointment(
    appointment_data: AppointmentCreate,
    session: DbSession,
    service: AppointmentServiceDep,
) -> AppointmentQueued:
    """Принимает заявку на запись и ставит её в очередь.

    Ответ 201 означает только то, что заявка принята. Итог (запись или
    пропуск из-за занятого слота) определяет воркер очереди.

    Args:
        appointment_data: userId, shopId, date, time (HH:MM)
        session: Асинхронная сессия базы данных
        service: Сервис приёма заявок
    Returns:
        AppointmentQueued: Сообщение о постановке в очередь
    Raises:
        HTTPException: 400 если нет полей, время некорректно или слот
            не открыт магазином
        HTTPException: 404 если пользователь или магазин не найден
        HTTPException: 500 если очередь недоступна

    """
    try:
        job_id = await service.queue_appointment(session, appointment_data)
    except BadRequestError as e:
        logger.warning(f'Заявка на запись отклонена: {str(e)}')
        raise http_error(e, status.HTTP_400_BAD_REQUEST)
    except NotFoundError as e:
        logger.warning(f'Заявка на запись отклонена: {str(e)}')
        raise http_error(e, status.HTTP_404_NOT_FOUND)
    except EnqueueError:
        raise http_error('Failed to queue appointment')
    except Exception as e:
        logger.error(f'Неожиданная ошибка при приёме заявки: {str(e)}')
        raise http_error('Failed to queue appointment')
    logger.info(f'Заявка на запись принята, задача {job_id}')
    return AppointmentQueued()


@router.get(
    '/',
    response_model=list[AppointmentInfo],
    response_model_by_alias=True,
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def get_all_appointments(
    session: DbSession,
    shop_id: UUID = Query(None, alias='shopId', description='ID магазина'),
    user_id: UUID = Query(None, alias='userId', description='ID клиента'),
) -> list[AppointmentInfo]:
    """Получает список записей с возможностью фильтрации."""
    try:
        return await booking_repository.get_multi_with_relations(
            session,
            shop_id=shop_id,
            user_id=user_id,
        )
    except Exception as e:
        logger.error(f'Ошибка при получении списка записей: {str(e)}')
        raise http_error('Failed to retrieve appointments')


@router.get(
    '/{appointment_id}',
    response_model=AppointmentInfo,
    responses={
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def get_appointment_by_id(
    appointment_id: UUID,
    session: DbSession,
) -> AppointmentInfo:
    """Получает запись по идентификатору."""
    try:
        booking = await booking_repository.get_with_relations(
            session,
            appointment_id,
        )
    except Exception as e:
        logger.error(f'Ошибка при получении записи {appointment_id}: {str(e)}')
        raise http_error('Failed to retrieve appointment')
    if not booking:
        raise http_error('Appointment not found', status.HTTP_404_NOT_FOUND)
    return booking


@router.patch(
    '/{appointment_id}',
    response_model=AppointmentInfo,
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': ErrorResponse},
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_409_CONFLICT: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
@event_logger('Обновлена', 'Booking')
async def update_appointment(
    appointment_id: UUID,
    update_data: AppointmentUpdate,
    session: DbSession,
) -> AppointmentInfo:
    """Переносит запись на другой час.

    Args:
        appointment_id: UUID записи
        update_data: shopId, date, hour
        session: Асинхронная сессия базы данных
    Returns:
        AppointmentInfo: Обновленная запись
    Raises:
        HTTPException: 400 если не переданы date, hour, shopId
        HTTPException: 404 если запись не найдена
        HTTPException: 409 если слот уже занят

    """
    if (
        update_data.date is None
        or update_data.hour is None
        or update_data.shop_id is None
    ):
        raise http_error(
            'Missing required fields: date, hour, shopId',
            status.HTTP_400_BAD_REQUEST,
        )
    try:
        booking = await booking_repository.get_by_id(session, appointment_id)
        if not booking:
            raise http_error(
                'Appointment not found',
                status.HTTP_404_NOT_FOUND,
            )
        conflict = await booking_repository.find_conflict(
            session,
            update_data.shop_id,
            update_data.date,
            update_data.hour,
            exclude_id=appointment_id,
        )
        if conflict:
            raise SlotAlreadyBookedError('Time slot already booked')
        await booking_repository.reschedule(
            session,
            booking,
            shop_id=update_data.shop_id,
            date=update_data.date,
            hour=update_data.hour,
        )
        return await booking_repository.get_with_relations(
            session,
            appointment_id,
        )
    except SlotAlreadyBookedError as e:
        logger.warning(f'Перенос записи {appointment_id} отклонён: {str(e)}')
        raise http_error(e, status.HTTP_409_CONFLICT)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'Ошибка при переносе записи {appointment_id}: {str(e)}')
        raise http_error('Failed to update appointment')


@router.delete(
    '/{appointment_id}',
    responses={
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
@event_logger('Удалена', 'Booking')
async def delete_appointment(
    appointment_id: UUID,
    session: DbSession,
) -> dict[str, str]:
    """Отменяет запись."""
    try:
        booking = await booking_repository.get_by_id(session, appointment_id)
        if not booking:
            raise http_error(
                'Appointment not found',
                status.HTTP_404_NOT_FOUND,
            )
        await booking_repository.delete(session, booking)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'Ошибка при отмене записи {appointment_id}: {str(e)}')
        raise http_error('Failed to cancel appointment')
    return {'message': 'Appointment cancelled successfully'}
