from datetime import datetime
from typing import Optional

from loguru import logger

from app.core.constants import SEND_NOTIFICATION_TASK
from app.models import Booking
from app.services.job_queue import JobQueue

DEFAULT_SUBJECT = 'Уведомление о записи'


class NotificationService:
    """Ставит уведомления в общую очередь задач."""

    def __init__(self, job_queue: JobQueue) -> None:
        """Инициализация сервиса."""
        self.job_queue = job_queue

    def send(
        self,
        emails: list[str],
        text: str,
        subject: str = DEFAULT_SUBJECT,
        html: bool = False,
        countdown: Optional[int] = None,
        eta: Optional[datetime] = None,
    ) -> str:
        """Отправляет задачу в Celery на отправку уведомления.

        Args:
            emails (list[str]): список электронных адресов.
            text (str): текст уведомления.
            subject (str, optional): тема уведомления.
            html (bool, optional): флаг, указывающий, отправлять ли в HTML.
            countdown (Optional[int]): через сколько секунд отправить.
            eta (Optional[datetime]): отправить уведомление к моменту времени.

        Note:
            Одновременно использовать eta и countdown нельзя.

        """
        if countdown and eta:
            raise ValueError('Нельзя одновременно использовать eta и countdown')

        return self.job_queue.add_task(
            SEND_NOTIFICATION_TASK,
            {'emails': emails, 'text': text, 'subject': subject, 'html': html},
            countdown=countdown,
            eta=eta,
        )

    def booking_committed(self, booking: Booking) -> Optional[str]:
        """Уведомляет клиента о подтверждённой записи."""
        email = booking.user.email if booking.user else None
        if not email:
            logger.warning(
                f'Нет email для уведомления о записи {booking.id}',
            )
            return None
        text = (
            'Ваша запись подтверждена.\n\n'
            f'Магазин: {booking.shop.name}\n'
            f'Дата: {booking.date}\n'
            f'Время: {booking.hour:02d}:'
            f'{booking.availability.time_slot.minute:02d}\n'
        )
        return self.send([email], text, subject='Запись подтверждена')
