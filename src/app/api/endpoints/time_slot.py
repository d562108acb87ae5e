import datetime
from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from loguru import logger

from app.core.db import DbSession
from app.repositories.shop import shop_repository
from app.repositories.time_slot import time_slot_repository
from app.schemas.common import ErrorResponse
from app.schemas.time_slot import (
    TimeSlotGenerate,
    TimeSlotInfo,
    TimeSlotsCreated,
)
from app.utils.http import http_error
from app.utils.logging_decorator import event_logger

router = APIRouter(
    prefix='/shops/{shop_id}/timeslots',
    tags=['Временные слоты'],
)


@router.post(
    '/{date}',
    response_model=TimeSlotsCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
@event_logger('Созданы', 'TimeSlot')
async def generate_time_slots(
    shop_id: UUID,
    date: datetime.date,
    slot_data: TimeSlotGenerate,
    session: DbSession,
) -> TimeSlotsCreated:
    """Генерирует слоты магазина на дату.

    Слоты идут с шагом interval минут от начала (включительно) до конца
    (исключительно). Уже существующие слоты не дублируются.

    Args:
        shop_id: UUID магазина
        date: Дата в формате YYYY-MM-DD
        slot_data: startHour, startMinute, endHour, endMinute, interval
        session: Асинхронная сессия базы данных
    Returns:
        TimeSlotsCreated: Количество добавленных слотов
    Raises:
        HTTPException: 404 если магазин не найден

    """
    try:
        if not await shop_repository.get_by_id(session, shop_id):
            raise http_error('Shop not found', status.HTTP_404_NOT_FOUND)
        count = await time_slot_repository.create_for_day(
            session,
            shop_id,
            date,
            slot_data,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f'Ошибка генерации слотов магазина {shop_id} на {date}: {str(e)}',
        )
        raise http_error('Failed to create time slots') from e
    return TimeSlotsCreated(count=count)


@router.get(
    '/{date}',
    response_model=List[TimeSlotInfo],
    responses={
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def get_time_slots(
    shop_id: UUID,
    date: datetime.date,
    session: DbSession,
) -> List[TimeSlotInfo]:
    """Получает слоты магазина на дату."""
    try:
        slots = await time_slot_repository.get_multi_by_day(
            session,
            shop_id,
            date,
        )
    except Exception as e:
        logger.error(
            f'Ошибка получения слотов магазина {shop_id} на {date}: {str(e)}',
        )
        raise http_error('Failed to retrieve time slots') from e
    if not slots:
        raise http_error(
            'No time slots found for this date',
            status.HTTP_404_NOT_FOUND,
        )
    return slots
