import asyncio
from typing import Any, Optional

from celery import Task
from fastapi_mail.errors import ConnectionErrors
from loguru import logger

from app.core.config import settings
from app.core.constants import CREATE_APPOINTMENT_TASK, SEND_NOTIFICATION_TASK
from app.core.db import build_engine, build_session_factory
from app.core.notification import send_notification
from app.services.appointment_worker import AppointmentWorker
from app.services.job_queue import JobQueue
from app.services.notification import NotificationService
from celery_app.main import celery_app


class AppointmentTask(Task):
    """Базовая задача с воркером записей, создаваемым один раз на процесс."""

    _worker: Optional[AppointmentWorker] = None

    @property
    def worker(self) -> AppointmentWorker:
        """Воркер записей текущего процесса."""
        if self._worker is None:
            engine = build_engine(settings.db_url, pooled=False)
            self._worker = AppointmentWorker(
                build_session_factory(engine),
                notifier=NotificationService(
                    JobQueue(self.app, settings.DEFAULT_QUEUE),
                ),
                engine=engine,
            )
        return self._worker

    async def close_worker(self) -> None:
        """Закрывает воркер записей, если он создавался."""
        if self._worker is not None:
            await self._worker.close()
            self._worker = None


class NotificationTask(Task):
    """Задача общей очереди: при исчерпании повторов уходит в dead-letter."""

    def on_failure(
        self,
        exc: Exception,
        task_id: str,
        args: tuple,
        kwargs: dict,
        einfo: Any,
    ) -> None:
        """Логирует задачу, исчерпавшую повторы."""
        logger.error(
            f'Задача {task_id} перемещена в dead-letter после '
            f'{self.request.retries} повторов: {kwargs}, ошибка: {exc}',
        )


@celery_app.task(
    bind=True,
    base=AppointmentTask,
    name=CREATE_APPOINTMENT_TASK,
    ignore_result=True,
    acks_late=True,
    reject_on_worker_lost=True,
    max_retries=0,
)
def create_appointment_task(self: AppointmentTask, payload: dict) -> str:
    """Таска на фиксацию записи из очереди appointments."""
    job_id = self.request.id or '-'
    outcome = asyncio.run(self.worker.process(payload, job_id=job_id))
    return outcome.value


@celery_app.task(
    bind=True,
    base=NotificationTask,
    name=SEND_NOTIFICATION_TASK,
    autoretry_for=(ConnectionErrors, OSError),
    retry_backoff=settings.JOB_RETRY_BACKOFF,
    retry_jitter=False,
    max_retries=settings.JOB_MAX_RETRIES,
)
def send_email_task(
    self: NotificationTask,
    emails: list[str],
    text: str,
    subject: str,
    html: bool,
) -> int:
    """Таска на отправку уведомления о записи."""
    asyncio.run(
        send_notification(
            emails=emails,
            text=text,
            subject=subject,
            html=html,
        ),
    )
    return len(emails)
