from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.time_slot import TimeSlotInfo


class AvailabilityCreate(BaseModel):
    """Набор слотов, которые магазин открывает для записи."""

    time_slot_ids: list[UUID]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator('time_slot_ids', mode='after')
    @classmethod
    def validate_not_empty(cls, value: list[UUID]) -> list[UUID]:
        """Проверяет, что список не пуст и без дубликатов."""
        if not value:
            raise ValueError('Availability array is required')
        if len(value) != len(set(value)):
            raise ValueError('Time slot list must not contain duplicates')
        return value


class AvailabilityInfo(BaseModel):
    """Доступность магазина со слотом."""

    id: UUID
    time_slot_id: UUID = Field(serialization_alias='timeSlotId')
    time_slot: TimeSlotInfo = Field(serialization_alias='timeSlot')

    model_config = ConfigDict(from_attributes=True)


class ShopAvailability(BaseModel):
    """Все открытые слоты магазина."""

    shop_id: UUID = Field(serialization_alias='shopId')
    availability: list[AvailabilityInfo]


class AvailabilityCreated(BaseModel):
    """Ответ на открытие слотов."""

    message: str = 'Shop availability updated successfully'
    count: int
