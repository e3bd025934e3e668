"""Shutdown coordination for the HTTP service."""

from .coordinator import ShutdownCoordinator, ShutdownState
from .errors import SignalInstallError
from .triggers import NeverFiresTrigger, SignalTrigger, TerminationTrigger, default_triggers

__all__ = [
    'ShutdownCoordinator',
    'ShutdownState',
    'SignalInstallError',
    'TerminationTrigger',
    'SignalTrigger',
    'NeverFiresTrigger',
    'default_triggers',
]
