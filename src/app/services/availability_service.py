from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import AVAILABILITY_CACHE_KEY
from app.core.exceptions import BadRequestError, NotFoundError
from app.repositories.availability import availability_repository
from app.repositories.shop import shop_repository
from app.schemas.availability import (
    AvailabilityCreate,
    AvailabilityInfo,
    ShopAvailability,
)
from app.services.cache_service import CacheService


class AvailabilityService:
    """Сервис управления доступностью магазинов с кешированием чтения."""

    @staticmethod
    async def get_shop_availability(
        session: AsyncSession,
        cache: CacheService,
        shop_id: UUID,
    ) -> ShopAvailability:
        """Возвращает открытые слоты магазина.

        Args:
            session: Асинхронная сессия базы данных
            cache: Сервис кеширования
            shop_id: UUID магазина

        Returns:
            ShopAvailability: слоты магазина, из кеша или из БД

        Raises:
            NotFoundError: магазин не найден

        """
        key = AVAILABILITY_CACHE_KEY.format(shop_id=shop_id)
        cached = await cache.get(key)
        if cached is not None:
            return ShopAvailability.model_validate(cached)
        await AvailabilityService._ensure_shop_exists(session, shop_id)
        rows = await availability_repository.get_multi_by_shop(
            session,
            shop_id,
        )
        result = ShopAvailability(
            shop_id=shop_id,
            availability=[
                AvailabilityInfo.model_validate(row) for row in rows
            ],
        )
        await cache.set(key, result.model_dump(mode='json'))
        return result

    @staticmethod
    async def set_shop_availability(
        session: AsyncSession,
        cache: CacheService,
        shop_id: UUID,
        obj_in: AvailabilityCreate,
    ) -> int:
        """Открывает слоты для записи и сбрасывает кеш магазина."""
        await AvailabilityService._ensure_shop_exists(session, shop_id)
        created = await availability_repository.create_for_shop(
            session,
            shop_id,
            obj_in,
        )
        await cache.clear_availability_cache(shop_id)
        return created

    @staticmethod
    async def delete_shop_availability(
        session: AsyncSession,
        cache: CacheService,
        shop_id: UUID,
        availability_id: UUID,
    ) -> None:
        """Закрывает слот магазина и сбрасывает кеш."""
        availability = await availability_repository.get_by_id(
            session,
            availability_id,
        )
        if availability is None or availability.shop_id != shop_id:
            raise NotFoundError('Availability slot not found for this shop')
        try:
            await availability_repository.delete(session, availability)
        except IntegrityError as e:
            await session.rollback()
            raise BadRequestError(
                'Availability slot is referenced by an appointment',
            ) from e
        await cache.clear_availability_cache(shop_id)

    @staticmethod
    async def _ensure_shop_exists(
        session: AsyncSession,
        shop_id: UUID,
    ) -> None:
        if await shop_repository.get_by_id(session, shop_id) is None:
            raise NotFoundError('Shop not found')
