from celery import Celery
from kombu import Queue

from app.core.config import settings
from app.core.constants import CREATE_APPOINTMENT_TASK, SEND_NOTIFICATION_TASK


def create_celery_app() -> Celery:
    """Создает приложение Celery.

    API строит собственный экземпляр как продюсер; воркер использует
    экземпляр этого модуля (celery -A celery_app.main worker).
    """
    app = Celery(
        'shop_appointments',
        broker=settings.rabbit_url,
        backend=settings.redis_url,
    )
    app.conf.update(
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        worker_prefetch_multiplier=1,
        worker_hijack_root_logger=False,
        enable_utc=True,
        include=['celery_app.tasks', 'celery_app.worker'],
        task_default_queue=settings.DEFAULT_QUEUE,
        task_queues=(
            Queue(settings.APPOINTMENT_QUEUE, durable=True),
            Queue(settings.DEFAULT_QUEUE, durable=True),
        ),
        task_routes={
            CREATE_APPOINTMENT_TASK: {'queue': settings.APPOINTMENT_QUEUE},
            SEND_NOTIFICATION_TASK: {'queue': settings.DEFAULT_QUEUE},
        },
    )
    return app


celery_app = create_celery_app()