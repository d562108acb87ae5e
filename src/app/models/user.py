from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base

if TYPE_CHECKING:
    from app.models import Booking


class User(Base):
    """Таблица клиентов, записывающихся на приём."""

    username: Mapped[str] = mapped_column(
        String(128),
        index=True,
        unique=True,
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(
        String(length=320),
        unique=True,
        index=True,
        nullable=True,
    )
    phone: Mapped[str | None] = mapped_column(
        String(32),
        unique=True,
        nullable=True,
    )

    bookings: Mapped[List['Booking']] = relationship(
        back_populates='user',
        lazy='raise',
    )

    __table_args__ = (
        CheckConstraint(
            'phone IS NOT NULL OR email IS NOT NULL',
            name='ck_user_contact',
        ),
    )
