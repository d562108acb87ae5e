import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.core.constants import MINUTES_IN_DAY

Hour = Annotated[int, Field(ge=0, le=23)]
Minute = Annotated[int, Field(ge=0, le=59)]


class TimeSlotGenerate(BaseModel):
    """Параметры генерации слотов на день с заданным шагом в минутах."""

    start_hour: Hour
    start_minute: Minute
    end_hour: Hour
    end_minute: Minute
    interval: Annotated[int, Field(gt=0, le=MINUTES_IN_DAY)]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode='after')
    def check_time_interval(self) -> 'TimeSlotGenerate':
        """Проверяет, что время начала меньше времени окончания."""
        if (self.start_hour, self.start_minute) >= (
            self.end_hour,
            self.end_minute,
        ):
            raise ValueError('Start time must be before end time')
        return self

    def instants(self) -> list[tuple[int, int]]:
        """Возвращает пары (час, минута) в полуинтервале [начало, конец)."""
        start = self.start_hour * 60 + self.start_minute
        end = self.end_hour * 60 + self.end_minute
        return [divmod(point, 60) for point in range(start, end, self.interval)]


class TimeSlotInfo(BaseModel):
    """Схема временного слота."""

    id: UUID
    shop_id: UUID = Field(serialization_alias='shopId')
    date: datetime.date
    hour: int
    minute: int

    model_config = ConfigDict(from_attributes=True)


class TimeSlotsCreated(BaseModel):
    """Результат генерации слотов."""

    message: str = 'Time slots created successfully'
    count: int
