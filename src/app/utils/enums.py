from enum import Enum


class BookingOutcome(str, Enum):
    """Enum класс для итогов обработки заявки на запись."""

    COMMITTED = 'COMMITTED'
    SKIPPED_CONFLICT = 'SKIPPED_CONFLICT'
    FAILED = 'FAILED'


class JobStatus(str, Enum):
    """Enum класс для состояний задач общей очереди (состояния Celery)."""

    PENDING = 'PENDING'
    RECEIVED = 'RECEIVED'
    STARTED = 'STARTED'
    RETRY = 'RETRY'
    SUCCESS = 'SUCCESS'
    FAILURE = 'FAILURE'
    REVOKED = 'REVOKED'
    REJECTED = 'REJECTED'
    IGNORED = 'IGNORED'
