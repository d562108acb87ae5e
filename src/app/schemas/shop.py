from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.types import StringConstraints

from app.utils.validators import validate_phone

NameConstraint = StringConstraints(
    strip_whitespace=True,
    min_length=1,
    max_length=128,
)

AddressConstraint = StringConstraints(
    strip_whitespace=True,
    min_length=1,
    max_length=300,
)


class ShopBase(BaseModel):
    """Базовая схема для магазина с общими полями."""

    name: Annotated[str, NameConstraint]
    address: Annotated[str, AddressConstraint]
    phone: Optional[str] = None
    description: Optional[str] = None

    _validate_phone = field_validator('phone', mode='before')(validate_phone)

    @field_validator('description', mode='after')
    @classmethod
    def normalize_description(cls, value: Optional[str]) -> Optional[str]:
        """Очищает описание от лишних пробелов и пустых значений."""
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None


class ShopCreate(ShopBase):
    """Схема для создания нового магазина."""


class ShopShortInfo(BaseModel):
    """Сокращенная схема магазина для вложенных объектов."""

    id: UUID
    name: str
    address: str

    model_config = ConfigDict(from_attributes=True)


class ShopInfo(ShopShortInfo):
    """Полная схема магазина."""

    phone: Optional[str] = None
    description: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
