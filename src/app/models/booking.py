import datetime
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, SmallInteger, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import BOOKING_UNIQUE_CONSTRAINT
from app.core.db import Base

if TYPE_CHECKING:
    from app.models import Availability, Shop, User


class Booking(Base):
    """Таблица подтверждённых записей на приём.

    Ограничение уникальности по (shop_id, date, hour) единственный
    механизм взаимного исключения между воркерами.
    """

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey('user.id', ondelete='CASCADE'),
        index=True,
        nullable=False,
    )
    shop_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey('shop.id', ondelete='CASCADE'),
        index=True,
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    hour: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    availability_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey('shopavailability.id', ondelete='RESTRICT'),
        nullable=False,
    )

    user: Mapped['User'] = relationship(
        back_populates='bookings',
        lazy='selectin',
    )
    shop: Mapped['Shop'] = relationship(lazy='selectin')
    availability: Mapped['Availability'] = relationship(lazy='selectin')

    __table_args__ = (
        UniqueConstraint(
            'shop_id',
            'date',
            'hour',
            name=BOOKING_UNIQUE_CONSTRAINT,
        ),
    )
