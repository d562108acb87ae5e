from typing import TYPE_CHECKING, List

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base

if TYPE_CHECKING:
    from app.models import Availability, TimeSlot


class Shop(Base):
    """Таблица магазинов (арендаторов)."""

    name: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
        index=True,
    )
    address: Mapped[str] = mapped_column(String(300), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    time_slots: Mapped[List['TimeSlot']] = relationship(
        back_populates='shop',
        lazy='raise',
    )
    availability: Mapped[List['Availability']] = relationship(
        back_populates='shop',
        lazy='raise',
    )
