from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    field_validator,
    model_validator,
)
from pydantic.types import StringConstraints

from app.core.constants import PHONE_PATTERN
from app.utils.validators import validate_email, validate_phone

NameConstraint = StringConstraints(
    strip_whitespace=True,
    min_length=3,
    max_length=128,
)


class UserBase(BaseModel):
    """Базовая схема для пользователя с основными полями."""

    username: Annotated[str, NameConstraint]
    email: Optional[EmailStr] = None
    phone: (
        Annotated[
            str,
            StringConstraints(pattern=PHONE_PATTERN),
        ]
        | None
    ) = None

    _validate_email = field_validator('email', mode='before')(validate_email)
    _validate_phone = field_validator('phone', mode='before')(validate_phone)


class UserCreate(UserBase):
    """Схема для создания нового пользователя."""

    @model_validator(mode='after')
    def validate_phone_or_email(self) -> 'UserCreate':
        """Проверяет, что указан email или телефон."""
        if not self.phone and not self.email:
            raise ValueError('Either email or phone is required')
        return self


class UserShortInfo(UserBase):
    """Сокращенная схема пользователя для вложенных объектов."""

    id: UUID

    model_config = ConfigDict(from_attributes=True)


class UserInfo(UserShortInfo):
    """Полная схема пользователя."""

    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
