"""Termination triggers raced by the shutdown coordinator."""

import asyncio
import signal
import sys
import types
from abc import ABC, abstractmethod
from asyncio import AbstractEventLoop
from typing import Any, Callable, List, Optional, Union

from .errors import SignalInstallError

# Type for signal handlers
SignalHandlerType = Union[Callable[[int, Optional[types.FrameType]], Any], int, None]


class TerminationTrigger(ABC):
    """An external event that asks the process to shut down."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def arm(self, loop: AbstractEventLoop) -> None:
        """Start listening for the event on the given loop."""
        pass

    @abstractmethod
    def disarm(self) -> None:
        """Stop listening and restore whatever was there before."""
        pass

    @abstractmethod
    async def wait(self) -> None:
        """Return once the event has fired."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class SignalTrigger(TerminationTrigger):
    """Trigger armed on a process signal.

    The handler only sets an event, so delivering the signal again after
    it fired is harmless.
    """

    def __init__(self, signum: int, name: Optional[str] = None):
        super().__init__(name or signal.Signals(signum).name)
        self.signum = signum
        self._fired: Optional[asyncio.Event] = None
        self._loop: Optional[AbstractEventLoop] = None
        self._uses_loop_handler = False
        self._original_handler: SignalHandlerType = None

    @property
    def fired(self) -> bool:
        return self._fired is not None and self._fired.is_set()

    def arm(self, loop: AbstractEventLoop) -> None:
        if self._loop is not None:
            return

        self._fired = asyncio.Event()
        self._loop = loop
        try:
            loop.add_signal_handler(self.signum, self._fired.set)
            self._uses_loop_handler = True
        except NotImplementedError:
            # Loops without add_signal_handler (Windows) still accept
            # plain signal handlers from the main thread.
            self._arm_with_signal_module()
        except (RuntimeError, ValueError, OSError) as e:
            self._loop = None
            raise SignalInstallError(self.name, e) from e

    def _arm_with_signal_module(self) -> None:
        try:
            self._original_handler = signal.getsignal(self.signum)
            signal.signal(self.signum, self._handle_signal)
        except (RuntimeError, ValueError, OSError) as e:
            self._loop = None
            raise SignalInstallError(self.name, e) from e

    def _handle_signal(self, sig_num: int, frame: Optional[types.FrameType]) -> None:
        if self._loop is not None and self._fired is not None:
            self._loop.call_soon_threadsafe(self._fired.set)

    def disarm(self) -> None:
        if self._loop is None:
            return

        if self._uses_loop_handler:
            if not self._loop.is_closed():
                self._loop.remove_signal_handler(self.signum)
        elif self._original_handler is not None:
            signal.signal(self.signum, self._original_handler)

        self._loop = None
        self._uses_loop_handler = False
        self._original_handler = None

    async def wait(self) -> None:
        if self._fired is None:
            raise RuntimeError(f"Trigger {self.name} is not armed")
        await self._fired.wait()


class NeverFiresTrigger(TerminationTrigger):
    """Stand-in for a trigger the platform cannot deliver."""

    def arm(self, loop: AbstractEventLoop) -> None:
        pass

    def disarm(self) -> None:
        pass

    async def wait(self) -> None:
        await asyncio.get_running_loop().create_future()


def supports_terminate_signal() -> bool:
    return sys.platform != "win32" and hasattr(signal, "SIGTERM")


def default_triggers() -> List[TerminationTrigger]:
    """Interrupt plus, where the platform has it, the termination request."""
    interrupt = SignalTrigger(signal.SIGINT, "SIGINT")
    terminate: TerminationTrigger
    if supports_terminate_signal():
        terminate = SignalTrigger(signal.SIGTERM, "SIGTERM")
    else:
        terminate = NeverFiresTrigger("SIGTERM")
    return [interrupt, terminate]
