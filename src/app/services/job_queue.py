from typing import Any, Optional

from celery import Celery
from celery.result import AsyncResult

from app.schemas.job import JobStatusInfo
from app.utils.enums import JobStatus


class JobQueue:
    """Общая очередь фоновых задач.

    В отличие от очереди записей, задачи здесь повторяются с
    экспоненциальной задержкой (настройки задаются на самих задачах).
    """

    def __init__(self, celery: Celery, queue_name: str) -> None:
        """Инициализация очереди."""
        self.celery = celery
        self.queue_name = queue_name

    def add_task(
        self,
        task_name: str,
        payload: Optional[dict[str, Any]] = None,
        **options: Any,
    ) -> str:
        """Ставит задачу в очередь и возвращает её идентификатор."""
        result = self.celery.send_task(
            task_name,
            kwargs=payload or {},
            queue=self.queue_name,
            **options,
        )
        return result.id

    def get_status(self, job_id: str) -> JobStatusInfo:
        """Возвращает состояние задачи из бэкенда результатов."""
        result = AsyncResult(job_id, app=self.celery)
        status = JobStatus(result.state)
        value = None
        if status == JobStatus.SUCCESS:
            value = result.result
        elif status in (JobStatus.FAILURE, JobStatus.RETRY):
            value = str(result.result)
        return JobStatusInfo(job_id=job_id, status=status, result=value)
