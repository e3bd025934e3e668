"""Service configuration loaded from the process environment."""

from .errors import ConfigError, MissingConfigError
from .settings import ServiceConfig

__all__ = ['ConfigError', 'MissingConfigError', 'ServiceConfig']
