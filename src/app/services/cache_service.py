import json
from typing import Any, Optional
from uuid import UUID

from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.core.config import settings
from app.core.constants import AVAILABILITY_CACHE_KEY


class CacheService:
    """Сервис для работы с кешем Redis.

    Недоступный Redis не ломает запросы: чтение возвращает промах,
    запись молча не выполняется.
    """

    def __init__(self) -> None:
        """."""
        self.redis: Optional[Redis] = None
        self.ttl = settings.REDIS_CACHE_TTL

    async def connect(self) -> None:
        """Установка подключения к Redis."""
        try:
            self.redis = Redis.from_url(
                settings.redis_url,
                encoding='utf-8',
                decode_responses=True,
            )
            await self.redis.ping()
            logger.info('Успешное подключение к Redis')
        except (RedisError, OSError) as e:
            logger.error(f'Ошибка подключения к Redis: {str(e)}')
            self.redis = None

    async def disconnect(self) -> None:
        """Закрытие подключения к Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info('Отключение от Redis')

    async def get(self, key: str) -> Optional[Any]:
        """Получение значения по ключу."""
        if not self.redis:
            return None
        try:
            data = await self.redis.get(key)
            if data:
                logger.debug(f'Кеш попадание: {key}')
                return json.loads(data)
            logger.debug(f'Кеш промах: {key}')
            return None
        except RedisError as e:
            logger.error(f'Ошибка получения из кеша: {str(e)}')
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
    ) -> bool:
        """Сохранение значения в кеш."""
        if not self.redis:
            return False
        try:
            serialized_value = json.dumps(value, default=str)
            expire_time = ttl or self.ttl
            await self.redis.setex(key, expire_time, serialized_value)
            return True
        except RedisError as e:
            logger.error(f'Ошибка сохранения в кеш: {str(e)}')
            return False

    async def delete(self, key: str) -> bool:
        """Удаление ключа из кеша."""
        if not self.redis:
            return False
        try:
            await self.redis.delete(key)
            return True
        except RedisError as e:
            logger.error(f'Ошибка удаления из кеша: {str(e)}')
            return False

    async def clear_availability_cache(self, shop_id: UUID) -> None:
        """Очистка кеша доступности магазина."""
        await self.delete(AVAILABILITY_CACHE_KEY.format(shop_id=shop_id))


cache_service = CacheService()
