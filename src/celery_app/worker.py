import asyncio
from typing import Any

from celery.signals import setup_logging, worker_shutdown, worker_shutting_down
from loguru import logger

from app.core.config import settings
from app.core.logging import configure_logging
from app.core.shutdown import ShutdownCoordinator
from celery_app.main import celery_app
from celery_app.tasks import create_appointment_task

coordinator = ShutdownCoordinator(settings.SHUTDOWN_TIMEOUT)
coordinator.register('воркер записей', create_appointment_task.close_worker)
coordinator.register('соединение с очередью', celery_app.close)


@setup_logging.connect
def on_setup_logging(**kwargs: Any) -> None:
    """Передаёт логирование процесса воркера в Loguru."""
    configure_logging('worker')


@worker_shutting_down.connect
def on_worker_shutting_down(sig: str, how: str, **kwargs: Any) -> None:
    """Воркер перестал брать задачи: запускаем таймер завершения.

    Celery дожидается выполняющихся задач сам, таймер ограничивает
    это ожидание сверху.
    """
    logger.info(f'Получен сигнал {sig}, режим завершения: {how}')
    coordinator.arm()


@worker_shutdown.connect
def on_worker_shutdown(**kwargs: Any) -> None:
    """Текущие задачи завершены: закрываем воркер и очередь."""
    asyncio.run(coordinator.shutdown())
