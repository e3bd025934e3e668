import asyncio
from typing import Mapping, Optional

from ...config import MissingConfigError, ServiceConfig
from ...logging import BaseLogger
from ...shutdown import ShutdownCoordinator, SignalInstallError
from ..errors import BindError
from ..runner import run_server

EXIT_OK = 0
EXIT_FAILURE = 1


class ServeCommand:
    """Command class for running the HTTP service."""

    def __init__(self, logger: BaseLogger):
        """
        Initialize the serve command.

        Args:
            logger: Logger instance
        """
        self.logger = logger

    def load_config(self, environ: Optional[Mapping[str, str]] = None) -> Optional[ServiceConfig]:
        """Load configuration, logging a warning when it is incomplete."""
        try:
            config = ServiceConfig.from_env(environ)
        except MissingConfigError as err:
            self.logger.log_warning(str(err))
            return None

        self.logger.log_info("DATABASE_URL loaded (value hidden)")
        return config

    async def serve(self, config: ServiceConfig) -> None:
        coordinator = ShutdownCoordinator(self.logger, config.graceful_shutdown_timeout)
        await run_server(config, self.logger, coordinator)

    def run(self, environ: Optional[Mapping[str, str]] = None) -> int:
        """
        Run the service until it is shut down.

        Args:
            environ: Environment to read configuration from

        Returns:
            Process exit code
        """
        self.logger.log_info("Booting application")

        config = self.load_config(environ)
        if config is None:
            return EXIT_FAILURE

        try:
            asyncio.run(self.serve(config))
        except SignalInstallError as err:
            self.logger.log_warning(str(err))
            return EXIT_FAILURE
        except BindError as err:
            self.logger.log_warning(str(err))
            return EXIT_FAILURE
        except KeyboardInterrupt:
            # Only reachable while no interrupt handler is armed.
            self.logger.log_warning("Interrupted outside of graceful shutdown handling")
            return EXIT_FAILURE
        except Exception as err:
            self.logger.log_warning(f"Server terminated: {err}")
            return EXIT_FAILURE

        self.logger.log_info("Server exited cleanly")
        return EXIT_OK
