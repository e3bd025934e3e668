import sys
from abc import ABC, abstractmethod
from typing import Any, Dict

from loguru import logger


class BaseLogger(ABC):
    """Abstract base class for service loggers.

    Every implementation writes to stdout so container runtimes pick the
    output up without extra configuration.
    """

    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level
        self.logger.configure(handlers=[{
            "sink": sys.stdout,
            "level": log_level,
            **self.handler_options(),
        }])

    @abstractmethod
    def handler_options(self) -> Dict[str, Any]:
        """Loguru handler options for this output format."""
        pass

    @abstractmethod
    def log_request(self, method: str, path: str, status_code: int, duration_ms: float):
        """Log a served HTTP request."""
        pass

    @abstractmethod
    def log_warning(self, message: str):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str):
        """Log a debug message."""
        pass
