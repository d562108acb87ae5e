from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

from app.core.shutdown import ShutdownCoordinator


def test_resources_are_closed_in_registration_order() -> None:
    closed: list[str] = []

    async def close_worker() -> None:
        closed.append('worker')

    coordinator = ShutdownCoordinator(1.0, force_exit=MagicMock())
    coordinator.register('worker', close_worker)
    coordinator.register('queue', lambda: closed.append('queue'))

    asyncio.run(coordinator.shutdown())

    assert closed == ['worker', 'queue']
    coordinator._force_exit.assert_not_called()


def test_failing_closer_does_not_stop_the_rest() -> None:
    closed: list[str] = []

    def broken() -> None:
        raise RuntimeError('already closed')

    coordinator = ShutdownCoordinator(1.0, force_exit=MagicMock())
    coordinator.register('worker', broken)
    coordinator.register('queue', lambda: closed.append('queue'))

    asyncio.run(coordinator.shutdown())

    assert closed == ['queue']


def test_hung_closer_forces_exit_after_timeout() -> None:
    force_exit = MagicMock()

    async def hang() -> None:
        await asyncio.sleep(5)

    coordinator = ShutdownCoordinator(0.05, force_exit=force_exit)
    coordinator.register('worker', hang)

    asyncio.run(coordinator.shutdown())

    force_exit.assert_called_once_with(1)


def test_shutdown_runs_once() -> None:
    closer = MagicMock()
    coordinator = ShutdownCoordinator(1.0, force_exit=MagicMock())
    coordinator.register('queue', closer)

    asyncio.run(coordinator.shutdown())
    asyncio.run(coordinator.shutdown())

    closer.assert_called_once_with()


def test_armed_timer_forces_exit_when_loop_is_blocked() -> None:
    force_exit = MagicMock()
    coordinator = ShutdownCoordinator(0.01, force_exit=force_exit)

    coordinator.arm()
    coordinator._timer.join(1)

    force_exit.assert_called_once_with(1)


def test_disarmed_timer_does_not_fire() -> None:
    force_exit = MagicMock()
    coordinator = ShutdownCoordinator(0.05, force_exit=force_exit)

    coordinator.arm()
    timer = coordinator._timer
    coordinator.disarm()
    timer.join(1)

    force_exit.assert_not_called()
