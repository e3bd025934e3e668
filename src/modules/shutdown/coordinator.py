"""Shutdown coordinator: races the termination triggers, then holds exit for the drain window."""

import asyncio
from asyncio import Task
from enum import Enum
from typing import Dict, List, Optional

from ..logging import BaseLogger
from .errors import SignalInstallError
from .triggers import TerminationTrigger, default_triggers


class ShutdownState(str, Enum):
    RUNNING = "running"
    SHUTDOWN_REQUESTED = "shutdown_requested"
    DRAINING = "draining"
    EXITED = "exited"


class ShutdownCoordinator:
    """Coordinates graceful shutdown of the HTTP service.

    The coordinator is single-shot: the first trigger to fire resolves the
    race and every later trigger is ignored for the rest of the process
    lifetime.
    """

    def __init__(
        self,
        logger: BaseLogger,
        drain_timeout: float = 10,
        triggers: Optional[List[TerminationTrigger]] = None
    ):
        """
        Initialize the shutdown coordinator.

        Args:
            logger: Logger instance for logging shutdown events
            drain_timeout: Seconds to hold exit after a trigger fires
            triggers: Triggers to race, defaults to SIGINT and SIGTERM
        """
        if drain_timeout < 0:
            raise ValueError(f"drain_timeout must be non-negative, got {drain_timeout}")

        self.logger = logger
        self.drain_timeout = drain_timeout
        self.triggers = triggers if triggers is not None else default_triggers()
        self._state = ShutdownState.RUNNING
        self._fired_by: Optional[str] = None
        self._requested = asyncio.Event()
        self._request_reason = "request"
        self._race_task: Optional[Task[str]] = None
        self._drain_task: Optional[Task[None]] = None
        self._installed: List[TerminationTrigger] = []

    @property
    def state(self) -> ShutdownState:
        return self._state

    @property
    def is_shutting_down(self) -> bool:
        """Check if shutdown is in progress."""
        return self._state != ShutdownState.RUNNING

    @property
    def fired_by(self) -> Optional[str]:
        """Name of the trigger that won the race, if any."""
        return self._fired_by

    def install(self) -> None:
        """
        Arm every trigger on the running event loop.

        Raises:
            SignalInstallError: If a trigger could not be armed. Triggers
                armed before the failure are disarmed again.
        """
        loop = asyncio.get_running_loop()
        for trigger in self.triggers:
            if trigger in self._installed:
                continue
            try:
                trigger.arm(loop)
            except SignalInstallError:
                self.restore()
                raise
            self._installed.append(trigger)

    def restore(self) -> None:
        """Disarm installed triggers and restore the previous handlers."""
        while self._installed:
            self._installed.pop().disarm()

    def request_shutdown(self, reason: str = "request") -> None:
        """Fire the shutdown race from code instead of a signal."""
        if self._fired_by is None and not self._requested.is_set():
            self._request_reason = reason
            self._requested.set()

    async def wait_for_trigger(self) -> str:
        """Wait until the first trigger fires and return its name."""
        if self._race_task is None:
            self._race_task = asyncio.ensure_future(self._race_triggers())
        return await self._race_task

    async def _race_triggers(self) -> str:
        waiters: Dict[Task, str] = {
            asyncio.ensure_future(trigger.wait()): trigger.name
            for trigger in self.triggers
        }
        waiters[asyncio.ensure_future(self._requested.wait())] = ""

        try:
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [task for task in waiters if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        # Several triggers may complete in the same loop iteration; trigger
        # order decides, the rest are discarded.
        winner = next(task for task in waiters if task in done)
        winner.result()
        self._fired_by = waiters[winner] or self._request_reason
        self._state = ShutdownState.SHUTDOWN_REQUESTED
        return self._fired_by

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a trigger, then hold for the drain window.

        Concurrent and repeated calls share one drain: only the first
        logs and sleeps, the others wait for it to finish.
        """
        if self._drain_task is None:
            self._drain_task = asyncio.ensure_future(self._trigger_then_drain())
        await self._drain_task

    async def _trigger_then_drain(self) -> None:
        fired_by = await self.wait_for_trigger()
        self._state = ShutdownState.DRAINING
        self.logger.log_info(
            f"Shutdown signal received ({fired_by}), draining for {self.drain_timeout}s"
        )
        await asyncio.sleep(self.drain_timeout)

    def mark_exited(self) -> None:
        self._state = ShutdownState.EXITED
