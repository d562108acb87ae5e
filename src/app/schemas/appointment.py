import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Hour = Annotated[int, Field(ge=0, le=23)]
Minute = Annotated[int, Field(ge=0, le=59)]

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AppointmentCreate(BaseModel):
    """Заявка клиента на запись.

    Поля необязательны на уровне схемы: отсутствие любого из них
    сервис превращает в ответ 400, а не 422.
    """

    user_id: Optional[UUID] = None
    shop_id: Optional[UUID] = None
    date: Optional[datetime.date] = None
    time: Optional[str] = None

    model_config = CAMEL_CONFIG


class AppointmentUpdate(BaseModel):
    """Перенос записи на другой час или в другой магазин."""

    shop_id: Optional[UUID] = None
    date: Optional[datetime.date] = None
    hour: Optional[Hour] = None

    model_config = CAMEL_CONFIG


class BookingRequest(BaseModel):
    """Сообщение очереди appointments.

    Живёт только в очереди: от приёма заявки до обработки воркером.
    """

    user_id: UUID
    shop_id: UUID
    date: datetime.date
    hour: Hour
    minute: Minute
    availability_id: UUID

    model_config = CAMEL_CONFIG

    def to_payload(self) -> dict:
        """Сериализует заявку в JSON-совместимый словарь для брокера."""
        return self.model_dump(mode='json', by_alias=True)


class AppointmentQueued(BaseModel):
    """Ответ на принятую в очередь заявку."""

    message: str = 'Appointment queued successfully'


class AppointmentTimeSlot(BaseModel):
    """Слот, на который оформлена запись."""

    id: UUID
    date: datetime.date
    hour: int
    minute: int

    model_config = ConfigDict(from_attributes=True)


class AppointmentAvailability(BaseModel):
    """Доступность магазина вместе со слотом."""

    id: UUID
    time_slot: AppointmentTimeSlot = Field(serialization_alias='timeSlot')

    model_config = ConfigDict(from_attributes=True)


class AppointmentInfo(BaseModel):
    """Полная схема записи со связями."""

    id: UUID
    user: 'UserShortInfo'
    shop: 'ShopShortInfo'
    date: datetime.date
    hour: int
    availability: AppointmentAvailability
    created_at: datetime.datetime = Field(serialization_alias='createdAt')

    model_config = ConfigDict(from_attributes=True)


from app.schemas.shop import ShopShortInfo  # noqa: E402
from app.schemas.user import UserShortInfo  # noqa: E402

AppointmentInfo.model_rebuild()
