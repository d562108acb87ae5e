from uuid import UUID

from fastapi import APIRouter, status
from loguru import logger

from app.core.db import DbSession
from app.core.dependencies import CacheServiceDep
from app.core.exceptions import BadRequestError, NotFoundError
from app.schemas.availability import (
    AvailabilityCreate,
    AvailabilityCreated,
    ShopAvailability,
)
from app.schemas.common import ErrorResponse
from app.services.availability_service import AvailabilityService
from app.utils.http import http_error
from app.utils.logging_decorator import event_logger

router = APIRouter(
    prefix='/shops/{shop_id}/availability',
    tags=['Доступность'],
)


@router.post(
    '/',
    response_model=AvailabilityCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': ErrorResponse},
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
@event_logger('Создана', 'ShopAvailability')
async def set_shop_availability(
    shop_id: UUID,
    availability_data: AvailabilityCreate,
    session: DbSession,
    cache: CacheServiceDep,
) -> AvailabilityCreated:
    """Открывает слоты магазина для записи.

    Args:
        shop_id: UUID магазина
        availability_data: timeSlotIds, слоты этого магазина
        session: Асинхронная сессия базы данных
        cache: Сервис кеширования
    Returns:
        AvailabilityCreated: Количество открытых слотов
    Raises:
        HTTPException: 400 если слот чужой, не существует или уже открыт
        HTTPException: 404 если магазин не найден

    """
    try:
        count = await AvailabilityService.set_shop_availability(
            session,
            cache,
            shop_id,
            availability_data,
        )
    except NotFoundError as e:
        raise http_error(e, status.HTTP_404_NOT_FOUND)
    except ValueError as e:
        raise http_error(e, status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        logger.error(
            f'Ошибка открытия слотов магазина {shop_id}: {str(e)}',
        )
        raise http_error('Failed to update shop availability') from e
    return AvailabilityCreated(count=count)


@router.get(
    '/',
    response_model=ShopAvailability,
    responses={
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def get_shop_availability(
    shop_id: UUID,
    session: DbSession,
    cache: CacheServiceDep,
) -> ShopAvailability:
    """Получает открытые слоты магазина (с кешированием)."""
    try:
        return await AvailabilityService.get_shop_availability(
            session,
            cache,
            shop_id,
        )
    except NotFoundError as e:
        raise http_error(e, status.HTTP_404_NOT_FOUND)
    except Exception as e:
        logger.error(
            f'Ошибка получения доступности магазина {shop_id}: {str(e)}',
        )
        raise http_error('Failed to retrieve shop availability') from e


@router.delete(
    '/{availability_id}',
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': ErrorResponse},
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
@event_logger('Удалена', 'ShopAvailability')
async def delete_shop_availability(
    shop_id: UUID,
    availability_id: UUID,
    session: DbSession,
    cache: CacheServiceDep,
) -> dict[str, str]:
    """Закрывает слот магазина для записи."""
    try:
        await AvailabilityService.delete_shop_availability(
            session,
            cache,
            shop_id,
            availability_id,
        )
    except NotFoundError as e:
        raise http_error(e, status.HTTP_404_NOT_FOUND)
    except BadRequestError as e:
        raise http_error(e, status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        logger.error(
            f'Ошибка закрытия слота {availability_id}: {str(e)}',
        )
        raise http_error('Failed to delete availability') from e
    return {'message': 'Availability slot deleted successfully'}
