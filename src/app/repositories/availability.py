import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Availability, TimeSlot
from app.repositories.base import CRUDBase
from app.schemas.availability import AvailabilityCreate


class AvailabilityRepository(CRUDBase[Availability, AvailabilityCreate]):
    """Репозиторий доступности магазинов."""

    def __init__(self) -> None:
        """Инициализация репозитория доступности."""
        super().__init__(Availability)

    async def find_for_slot(
        self,
        session: AsyncSession,
        shop_id: UUID,
        date: datetime.date,
        hour: int,
        minute: int,
    ) -> Optional[Availability]:
        """Ищет доступность магазина для конкретного момента времени."""
        stmt = (
            select(Availability)
            .join(TimeSlot, Availability.time_slot_id == TimeSlot.id)
            .where(
                Availability.shop_id == shop_id,
                TimeSlot.date == date,
                TimeSlot.hour == hour,
                TimeSlot.minute == minute,
            )
            .options(selectinload(Availability.time_slot))
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_multi_by_shop(
        self,
        session: AsyncSession,
        shop_id: UUID,
    ) -> List[Availability]:
        """Получает все открытые слоты магазина."""
        return await self.get(
            session,
            many=True,
            options=[selectinload(Availability.time_slot)],
            shop_id=shop_id,
        )

    async def create_for_shop(
        self,
        session: AsyncSession,
        shop_id: UUID,
        obj_in: AvailabilityCreate,
    ) -> int:
        """Открывает слоты магазина для записи.

        Raises:
            ValueError: слот не найден, принадлежит другому магазину
                или уже открыт.

        """
        for time_slot_id in obj_in.time_slot_ids:
            time_slot = await session.get(TimeSlot, time_slot_id)
            if time_slot is None or time_slot.shop_id != shop_id:
                raise ValueError(f'TimeSlot with id {time_slot_id} not found')
            existing = await self.get(
                session,
                shop_id=shop_id,
                time_slot_id=time_slot_id,
            )
            if existing:
                raise ValueError(
                    f'TimeSlot with id {time_slot_id} is already set '
                    'for this shop',
                )
        session.add_all(
            Availability(shop_id=shop_id, time_slot_id=time_slot_id)
            for time_slot_id in obj_in.time_slot_ids
        )
        await session.commit()
        return len(obj_in.time_slot_ids)


availability_repository = AvailabilityRepository()
