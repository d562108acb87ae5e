from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.endpoints import routers
from app.core.config import settings
from app.core.db import engine
from app.core.exception_handler import (
    appointment_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.core.exceptions import AppointmentError
from app.core.logging import configure_logging
from app.core.shutdown import ShutdownCoordinator
from app.middleware.http_logging import logging_middleware
from app.services.appointment_queue import AppointmentQueue
from app.services.cache_service import cache_service
from app.services.job_queue import JobQueue
from celery_app.main import create_celery_app


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator:
    """Создаёт ресурсы процесса API и освобождает их при остановке.

    Продюсер очередей создаётся здесь и передаётся в эндпоинты через
    зависимости. При остановке ресурсы закрываются в порядке регистрации
    в пределах SHUTDOWN_TIMEOUT.
    """
    configure_logging()
    await cache_service.connect()
    producer = create_celery_app()
    app.state.appointment_queue = AppointmentQueue(
        producer,
        settings.APPOINTMENT_QUEUE,
    )
    app.state.job_queue = JobQueue(producer, settings.DEFAULT_QUEUE)

    coordinator = ShutdownCoordinator(settings.SHUTDOWN_TIMEOUT)
    coordinator.register('Очередь записей', app.state.appointment_queue.close)
    coordinator.register('Redis', cache_service.disconnect)
    coordinator.register('Пул соединений БД', engine.dispose)
    yield
    await coordinator.shutdown()


app = FastAPI(
    title='Запись на приём в магазины',
    description='API приёма заявок на запись с обработкой через очередь',
    version='0.1.0',
    lifespan=lifespan,
    root_path='/api',
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(AppointmentError, appointment_exception_handler)

app.middleware('http')(logging_middleware)


for router in routers:
    app.include_router(router)
