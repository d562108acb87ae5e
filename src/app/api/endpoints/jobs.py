from fastapi import APIRouter, status
from loguru import logger

from app.core.dependencies import JobQueueDep
from app.schemas.common import ErrorResponse
from app.schemas.job import JobStatusInfo
from app.utils.http import http_error

router = APIRouter(prefix='/jobs', tags=['Задачи'])


@router.get(
    '/{job_id}',
    response_model=JobStatusInfo,
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
def get_job_status(job_id: str, job_queue: JobQueueDep) -> JobStatusInfo:
    """Состояние задачи общей очереди.

    Чтение из бэкенда результатов блокирующее, поэтому обработчик
    синхронный и выполняется в пуле потоков.

    Неизвестный идентификатор возвращается со статусом PENDING.
    """
    try:
        return job_queue.get_status(job_id)
    except Exception as e:
        logger.error(f'Ошибка получения статуса задачи {job_id}: {str(e)}')
        raise http_error('Failed to retrieve job status') from e
