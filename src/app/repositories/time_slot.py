import datetime
from typing import List
from uuid import UUID

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import TimeSlot
from app.repositories.base import CRUDBase
from app.schemas.time_slot import TimeSlotGenerate


class TimeSlotRepository(CRUDBase[TimeSlot, TimeSlotGenerate]):
    """Репозиторий для операций с временными слотами."""

    def __init__(self) -> None:
        """Инициализация репозитория слотов."""
        super().__init__(TimeSlot)

    async def get_multi_by_day(
        self,
        session: AsyncSession,
        shop_id: UUID,
        date: datetime.date,
    ) -> List[TimeSlot]:
        """Получает слоты магазина на дату в порядке времени."""
        return await self.get(
            session,
            many=True,
            order_by=(TimeSlot.hour, TimeSlot.minute),
            shop_id=shop_id,
            date=date,
        )

    async def create_for_day(
        self,
        session: AsyncSession,
        shop_id: UUID,
        date: datetime.date,
        obj_in: TimeSlotGenerate,
    ) -> int:
        """Создает слоты на дату, пропуская уже существующие.

        Returns:
            int: количество реально добавленных слотов.

        """
        rows = [
            {'shop_id': shop_id, 'date': date, 'hour': hour, 'minute': minute}
            for hour, minute in obj_in.instants()
        ]
        stmt = (
            insert(TimeSlot)
            .values(rows)
            .on_conflict_do_nothing(constraint='uq_timeslot_shop_instant')
            .returning(TimeSlot.id)
        )
        result = await session.execute(stmt)
        created = len(result.scalars().all())
        await session.commit()
        return created


time_slot_repository = TimeSlotRepository()
