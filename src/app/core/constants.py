from datetime import datetime

# Настройки логгера
MS_IN_SECOND = 1000
LOG_DEPTH = 7
LOG_ENCODING = 'utf-8'
LOG_COMPRESSION = 'zip'
LOG_FORMAT = (
    '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | '
    '<level>{level: <8}</level> | '
    '{extra[process]}[{extra[request_id]}] | '
    '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | '
    '<level>{message}</level>'
)
FILE_LOG_FORMAT = (
    '{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | '
    '{extra[process]}[{extra[request_id]}] | '
    '{name}:{function}:{line} | {message}'
)
INTERCEPTED_LOGGERS = (
    'uvicorn',
    'uvicorn.error',
    'sqlalchemy',
    'celery',
    'kombu',
)
NOISE_PATHS = {'/docs', '/openapi.json', '/health', '/livez', '/readyz'}
HTTP_LOG_TEMPLATE = (
    '{method} {path} -> {status} ({ms:.1f} ms)\n    ip={ip}\n    ua={ua}\n'
)

# Разрешённый формат телефонного номера
PHONE_PATTERN = r'^\+[1-9][0-9]{7,14}$'

# Записи на приём
CREATE_APPOINTMENT_TASK = 'createAppointment'
SEND_NOTIFICATION_TASK = 'send-notification'
BOOKING_UNIQUE_CONSTRAINT = 'uq_booking_shop_date_hour'
UNIQUE_VIOLATION_SQLSTATE = '23505'
TIME_PATTERN = r'^(\d{1,2}):(\d{1,2})$'
MAX_HOUR = 23
MAX_MINUTE = 59
MINUTES_IN_DAY = 24 * 60
FORCE_EXIT_CODE = 1

# Кеш
AVAILABILITY_CACHE_KEY = 'availability:{shop_id}'


def get_logger_header() -> str:
    """Формирует заголовок для нового лог-файла."""
    return (
        '\n'
        '================= LOGGER - SHOP_APPOINTMENTS ==================\n'
        f'Date: {datetime.now():%Y-%m-%d %H:%M:%S}\n'
        '================================================================\n\n'
    )
