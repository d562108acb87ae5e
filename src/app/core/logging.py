import logging
import sys
from pathlib import Path
from typing import Callable

from loguru import logger

from app.core.config import (
    LOG_DIR,
    settings,
)
from app.core.constants import (
    FILE_LOG_FORMAT,
    INTERCEPTED_LOGGERS,
    LOG_COMPRESSION,
    LOG_DEPTH,
    LOG_ENCODING,
    LOG_FORMAT,
    get_logger_header,
)

_STD_INTERCEPT_CONFIGURED = False


class InterceptHandler(logging.Handler):
    """Перехват stdlib логов (uvicorn, sqlalchemy, celery) в loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Передаёт запись стандартного логгера в Loguru."""
        try:
            lvl = logger.level(record.levelname).name
        except ValueError:
            lvl = record.levelno
        logger.opt(
            depth=LOG_DEPTH,
            exception=record.exc_info,
        ).log(lvl, record.getMessage())


def setup_stdlib_intercept() -> None:
    """Перенаправляет стандартные логи в Loguru."""
    global _STD_INTERCEPT_CONFIGURED
    if _STD_INTERCEPT_CONFIGURED:
        return
    root = logging.getLogger()
    root.handlers = [InterceptHandler()]
    root.setLevel(logging.NOTSET)

    for name in INTERCEPTED_LOGGERS:
        log = logging.getLogger(name)
        log.handlers = [InterceptHandler()]
        log.propagate = False
    _STD_INTERCEPT_CONFIGURED = True


def _defaults_patcher(process_name: str) -> Callable[[dict], None]:
    """Возвращает patcher, заполняющий extra-поля по умолчанию.

    process: имя процесса (app или worker), request_id: X-Request-ID
    запроса в API или идентификатор задачи в воркере.
    """

    def patch(record: dict) -> None:
        record['extra'].setdefault('process', process_name)
        record['extra'].setdefault('request_id', '-')

    return patch


def _write_log_header(path: Path) -> None:
    """Записывает заголовок с датой в начало лог-файла при его создании."""
    header = get_logger_header()
    try:
        with open(path, 'a', encoding=LOG_ENCODING) as f:
            f.write(header)
    except IOError as e:
        print(f'Не удалось записать заголовок в файл {path}: {e}')


def configure_logging(log_name: str = 'app') -> None:
    """Настраивает Loguru, создаёт sinks и подключает перехват логов stdlib.

    Args:
        log_name: имя файла лога без расширения. API пишет в app.log,
            воркер очереди записей в worker.log.

    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f'{log_name}.log'
    if not log_file.exists() or log_file.stat().st_size == 0:
        _write_log_header(log_file)

    logger.remove()
    logger.configure(patcher=_defaults_patcher(log_name))

    logger.add(
        sys.stdout,
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        colorize=True,
        enqueue=True,
        backtrace=False,
        diagnose=False,
    )

    logger.add(
        log_file,
        level=settings.LOG_LEVEL,
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        compression=LOG_COMPRESSION,
        format=FILE_LOG_FORMAT,
        encoding=LOG_ENCODING,
        enqueue=True,
        backtrace=False,
        diagnose=False,
    )

    setup_stdlib_intercept()
