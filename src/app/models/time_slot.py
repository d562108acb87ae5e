import datetime
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base

if TYPE_CHECKING:
    from app.models import Shop


class TimeSlot(Base):
    """Таблица моментов времени, на которые можно записаться."""

    shop_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey('shop.id', ondelete='CASCADE'),
        index=True,
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    hour: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    minute: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    shop: Mapped['Shop'] = relationship(
        back_populates='time_slots',
        lazy='raise',
    )

    __table_args__ = (
        UniqueConstraint(
            'shop_id',
            'date',
            'hour',
            'minute',
            name='uq_timeslot_shop_instant',
        ),
        CheckConstraint('hour BETWEEN 0 AND 23', name='ck_timeslot_hour'),
        CheckConstraint(
            'minute BETWEEN 0 AND 59',
            name='ck_timeslot_minute',
        ),
    )
