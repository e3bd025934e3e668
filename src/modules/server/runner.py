from typing import Optional

from aiohttp import web

from ..config import ServiceConfig
from ..logging import BaseLogger
from ..shutdown import ShutdownCoordinator
from .app import create_app
from .errors import BindError


async def run_server(
    config: ServiceConfig,
    logger: BaseLogger,
    coordinator: ShutdownCoordinator,
    app: Optional[web.Application] = None
) -> None:
    """
    Serve HTTP until the coordinator lets go, then drain and stop.

    Requests keep being served while the coordinator races its triggers
    and during the drain window. Once it returns, the listener is closed
    and in-flight requests get up to ``graceful_shutdown_timeout`` seconds
    to finish.

    Args:
        config: Service configuration
        logger: Logger instance
        coordinator: Shutdown coordinator gating the serve loop
        app: Application to serve, defaults to ``create_app(logger)``

    Raises:
        SignalInstallError: If the termination triggers could not be armed
        BindError: If the listener could not be bound
    """
    if app is None:
        app = create_app(logger)

    runner = web.AppRunner(
        app,
        handle_signals=False,
        access_log=None,
        shutdown_timeout=config.graceful_shutdown_timeout,
    )
    await runner.setup()
    try:
        coordinator.install()

        site = web.TCPSite(runner, config.host, config.port)
        try:
            await site.start()
        except OSError as e:
            raise BindError(config.host, config.port, e) from e

        logger.log_info(f"Listening on {config.listen_url}")
        await coordinator.wait_for_shutdown()
    finally:
        await runner.cleanup()
        coordinator.restore()

    coordinator.mark_exited()
