from typing import Annotated

from fastapi import Depends, Request

from app.services.appointment_queue import AppointmentQueue
from app.services.appointment_service import AppointmentService
from app.services.cache_service import CacheService, cache_service
from app.services.job_queue import JobQueue


async def get_cache_service() -> CacheService:
    """Зависимость для получения сервиса кеширования."""
    return cache_service


def get_appointment_queue(request: Request) -> AppointmentQueue:
    """Очередь записей, созданная при запуске приложения."""
    return request.app.state.appointment_queue


def get_job_queue(request: Request) -> JobQueue:
    """Общая очередь задач, созданная при запуске приложения."""
    return request.app.state.job_queue


def get_appointment_service(
    queue: Annotated[AppointmentQueue, Depends(get_appointment_queue)],
) -> AppointmentService:
    """Сервис приёма заявок поверх очереди текущего процесса."""
    return AppointmentService(queue)


CacheServiceDep = Annotated[CacheService, Depends(get_cache_service)]
JobQueueDep = Annotated[JobQueue, Depends(get_job_queue)]
AppointmentServiceDep = Annotated[
    AppointmentService,
    Depends(get_appointment_service),
]
