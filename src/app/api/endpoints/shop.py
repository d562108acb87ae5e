from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from loguru import logger

from app.core.db import DbSession
from app.repositories.shop import shop_repository
from app.schemas.common import ErrorResponse
from app.schemas.shop import ShopCreate, ShopInfo
from app.utils.http import http_error
from app.utils.logging_decorator import event_logger

router = APIRouter(prefix='/shops', tags=['Магазины'])


@router.get(
    '/',
    response_model=List[ShopInfo],
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def get_all_shops(
    session: DbSession,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
) -> List[ShopInfo]:
    """Получение списка активных магазинов."""
    try:
        return await shop_repository.get_multi_active(
            session,
            skip=skip,
            limit=limit,
        )
    except Exception as e:
        logger.error(f'Ошибка при получении списка магазинов: {str(e)}')
        raise http_error('Failed to retrieve shops')


@router.post(
    '/',
    response_model=ShopInfo,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
@event_logger('Создана', 'Shop')
async def create_shop(
    shop_data: ShopCreate,
    session: DbSession,
) -> ShopInfo:
    """Создание нового магазина.

    Raises:
        HTTPException: 400 если магазин с таким названием уже есть

    """
    try:
        return await shop_repository.create(session, shop_data)
    except ValueError as e:
        raise http_error(e, status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        logger.error(f'Ошибка при создании магазина: {str(e)}')
        raise http_error('Failed to create shop') from e


@router.get(
    '/{shop_id}',
    response_model=ShopInfo,
    responses={
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def get_shop_by_id(shop_id: UUID, session: DbSession) -> ShopInfo:
    """Получение информации о магазине по ID."""
    try:
        shop = await shop_repository.get_by_id(session, shop_id)
        if not shop:
            raise http_error('Shop not found', status.HTTP_404_NOT_FOUND)
        return shop
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'Ошибка при получении магазина {shop_id}: {str(e)}')
        raise http_error('Failed to retrieve shop') from e
