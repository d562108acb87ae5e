from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Shop
from app.repositories.base import CRUDBase
from app.schemas.shop import ShopCreate


class ShopRepository(CRUDBase[Shop, ShopCreate]):
    """Репозиторий для операций с магазинами."""

    def __init__(self) -> None:
        """Инициализация репозитория магазинов."""
        super().__init__(Shop)

    async def get_multi_active(
        self,
        session: AsyncSession,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Shop]:
        """Получает список активных магазинов."""
        return await self.get(
            session,
            Shop.is_active.is_(True),
            many=True,
            order_by=(Shop.name,),
            offset=skip,
            limit=limit,
        )


shop_repository = ShopRepository()
