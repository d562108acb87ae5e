from celery import Celery
from kombu.exceptions import OperationalError
from loguru import logger

from app.core.constants import CREATE_APPOINTMENT_TASK
from app.core.exceptions import EnqueueError


class AppointmentQueue:
    """Очередь заявок на запись поверх брокера Celery.

    Доставка как минимум однократная: задача подтверждается брокеру
    только после обработки воркером. Повторов при ошибке нет.
    """

    def __init__(self, celery: Celery, queue_name: str) -> None:
        """Инициализация очереди."""
        self.celery = celery
        self.queue_name = queue_name

    def enqueue(
        self,
        payload: dict,
        task_name: str = CREATE_APPOINTMENT_TASK,
        *,
        remove_on_complete: bool = True,
    ) -> str:
        """Ставит заявку в очередь.

        Args:
            payload: сериализованный BookingRequest.
            task_name: имя задачи воркера.
            remove_on_complete: не хранить результат выполненной задачи.

        Returns:
            str: идентификатор задачи в брокере.

        Raises:
            EnqueueError: брокер недоступен.

        """
        try:
            result = self.celery.send_task(
                task_name,
                kwargs={'payload': payload},
                queue=self.queue_name,
                ignore_result=remove_on_complete,
            )
        except (OperationalError, OSError) as e:
            logger.error(
                f'Не удалось поставить задачу {task_name} в очередь '
                f'{self.queue_name}: {str(e)}',
            )
            raise EnqueueError('Failed to queue appointment') from e
        logger.info(
            f'Задача {result.id} ({task_name}) поставлена в очередь '
            f'{self.queue_name}',
        )
        return result.id

    def close(self) -> None:
        """Закрывает соединения продюсера с брокером."""
        self.celery.close()
