"""Модуль схем Pydantic для валидации и сериализации данных.

Содержит схемы для всех сущностей системы:
- Магазины (Shop)
- Пользователи (User)
- Временные слоты (TimeSlot) и доступность магазина (Availability)
- Записи на приём (Appointment) и сообщение очереди (BookingRequest)
- Состояние фоновых задач (Job)

Тела запросов записи принимают поля в camelCase, как их шлёт клиент.
"""

from .appointment import (
    AppointmentCreate,
    AppointmentInfo,
    AppointmentQueued,
    AppointmentUpdate,
    BookingRequest,
)
from .availability import (
    AvailabilityCreate,
    AvailabilityCreated,
    AvailabilityInfo,
    ShopAvailability,
)
from .common import ErrorResponse
from .job import JobStatusInfo
from .shop import ShopCreate, ShopInfo, ShopShortInfo
from .time_slot import TimeSlotGenerate, TimeSlotInfo, TimeSlotsCreated
from .user import UserCreate, UserInfo, UserShortInfo

__all__ = [
    'AppointmentCreate',
    'AppointmentInfo',
    'AppointmentQueued',
    'AppointmentUpdate',
    'BookingRequest',
    'AvailabilityCreate',
    'AvailabilityCreated',
    'AvailabilityInfo',
    'ShopAvailability',
    'ErrorResponse',
    'JobStatusInfo',
    'ShopCreate',
    'ShopInfo',
    'ShopShortInfo',
    'TimeSlotGenerate',
    'TimeSlotInfo',
    'TimeSlotsCreated',
    'UserCreate',
    'UserInfo',
    'UserShortInfo',
]
