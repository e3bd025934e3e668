"""HTTP service: application, runner and serve command."""

from .app import create_app
from .errors import BindError, ServerError
from .runner import run_server

__all__ = ['BindError', 'ServerError', 'create_app', 'run_server']
