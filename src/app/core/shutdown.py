import asyncio
import inspect
import os
import threading
from typing import Awaitable, Callable, Optional, Union

from loguru import logger

from app.core.constants import FORCE_EXIT_CODE

Closer = Callable[[], Union[Awaitable[None], None]]


class ShutdownCoordinator:
    """Корректное завершение процесса по SIGTERM/SIGINT.

    Ресурсы закрываются в порядке регистрации: сначала воркер (перестаёт
    брать задачи и дожидается текущих), затем соединение с очередью.
    Весь процесс ограничен жёстким таймаутом, по истечении которого
    процесс завершается принудительно. Брошенные задачи брокер доставит
    следующему воркеру.
    """

    def __init__(
        self,
        timeout: float,
        force_exit: Callable[[int], None] = os._exit,
    ) -> None:
        """Инициализация координатора."""
        self.timeout = timeout
        self._force_exit = force_exit
        self._closers: list[tuple[str, Closer]] = []
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._started = False
        self._forced = False

    def register(self, name: str, closer: Closer) -> None:
        """Регистрирует ресурс для закрытия при завершении."""
        self._closers.append((name, closer))

    def arm(self) -> None:
        """Запускает таймер принудительного завершения.

        Таймер работает в отдельном потоке и срабатывает даже тогда,
        когда event loop заблокирован синхронным вызовом.
        """
        with self._lock:
            if self._timer is not None:
                return
            self._timer = threading.Timer(self.timeout, self._force)
            self._timer.daemon = True
            self._timer.start()
        logger.info(
            f'Начато завершение, таймаут {self.timeout} с',
        )

    def disarm(self) -> None:
        """Отменяет таймер принудительного завершения."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    async def shutdown(self) -> None:
        """Закрывает все зарегистрированные ресурсы в пределах таймаута."""
        if self._started:
            return
        self._started = True
        self.arm()
        try:
            await asyncio.wait_for(self._close_all(), timeout=self.timeout)
            logger.info('Завершение выполнено')
        except asyncio.TimeoutError:
            self._force()
        finally:
            self.disarm()

    async def _close_all(self) -> None:
        for name, closer in self._closers:
            try:
                result = closer()
                if inspect.isawaitable(result):
                    await result
                logger.info(f'{name}: закрыто')
            except Exception:
                logger.opt(exception=True).error(
                    f'Ошибка при закрытии {name}',
                )

    def _force(self) -> None:
        with self._lock:
            if self._forced:
                return
            self._forced = True
        logger.critical(
            f'Завершение не уложилось в {self.timeout} с, '
            'принудительный выход',
        )
        self._force_exit(FORCE_EXIT_CODE)
