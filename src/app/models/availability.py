import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base

if TYPE_CHECKING:
    from app.models import Shop, TimeSlot


class Availability(Base):
    """Таблица слотов, которые магазин открыл для записи."""

    __tablename__ = 'shopavailability'

    shop_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey('shop.id', ondelete='CASCADE'),
        index=True,
        nullable=False,
    )
    time_slot_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey('timeslot.id', ondelete='RESTRICT'),
        nullable=False,
    )

    shop: Mapped['Shop'] = relationship(
        back_populates='availability',
        lazy='raise',
    )
    time_slot: Mapped['TimeSlot'] = relationship(lazy='selectin')

    __table_args__ = (
        UniqueConstraint(
            'shop_id',
            'time_slot_id',
            name='uq_availability_shop_slot',
        ),
    )
