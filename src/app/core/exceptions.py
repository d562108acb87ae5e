class AppointmentError(Exception):
    """Базовая ошибка конвейера записи на приём."""


class BadRequestError(AppointmentError):
    """Некорректная заявка: нет полей, неверное время, нет доступности."""


class NotFoundError(AppointmentError):
    """Пользователь или магазин не найден."""


class EnqueueError(AppointmentError):
    """Очередь недоступна в момент приёма заявки."""


class SlotAlreadyBookedError(AppointmentError):
    """Слот (магазин, дата, час) уже занят другим бронированием."""
