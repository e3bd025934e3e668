import pytest
from unittest.mock import AsyncMock, patch

from src.modules.server.command.serve import EXIT_FAILURE, EXIT_OK, ServeCommand
from src.modules.server.errors import BindError
from src.modules.shutdown import ShutdownCoordinator, SignalInstallError
from tests.utils.test_logger import create_test_logger

RUN_SERVER = "src.modules.server.command.serve.run_server"


@pytest.fixture
def logger():
    return create_test_logger()


@pytest.fixture
def environ():
    return {
        "DATABASE_URL": "postgres://user:hunter2@db/app",
        "APP_PORT": "9090",
        "GRACEFUL_SHUTDOWN_TIMEOUT": "3",
    }


class TestServeCommand:
    """Test cases for ServeCommand class."""

    def test_missing_database_url_exits_before_serving(self, logger):
        with patch(RUN_SERVER, new_callable=AsyncMock) as run_server:
            exit_code = ServeCommand(logger).run({"APP_PORT": "9090"})

        assert exit_code == EXIT_FAILURE
        run_server.assert_not_called()
        assert "WARNING: DATABASE_URL is not set" in logger.get_logs()

    def test_clean_shutdown(self, logger, environ):
        with patch(RUN_SERVER, new_callable=AsyncMock) as run_server:
            exit_code = ServeCommand(logger).run(environ)

        assert exit_code == EXIT_OK
        config, passed_logger, coordinator = run_server.await_args.args
        assert config.port == 9090
        assert passed_logger is logger
        assert isinstance(coordinator, ShutdownCoordinator)
        assert coordinator.drain_timeout == 3
        assert logger.get_logs() == [
            "INFO: Booting application",
            "INFO: DATABASE_URL loaded (value hidden)",
            "INFO: Server exited cleanly",
        ]

    def test_connection_string_is_never_logged(self, logger, environ):
        with patch(RUN_SERVER, new_callable=AsyncMock):
            ServeCommand(logger).run(environ)

        assert not any("hunter2" in line for line in logger.get_logs())

    @pytest.mark.parametrize("error, message", [
        (BindError("0.0.0.0", 9090, OSError("address in use")),
         "WARNING: Failed to bind TCP listener on 0.0.0.0:9090: address in use"),
        (SignalInstallError("SIGINT", RuntimeError("not main thread")),
         "WARNING: Failed to install SIGINT handler: not main thread"),
    ])
    def test_fatal_startup_errors(self, logger, environ, error, message):
        with patch(RUN_SERVER, new_callable=AsyncMock, side_effect=error):
            exit_code = ServeCommand(logger).run(environ)

        assert exit_code == EXIT_FAILURE
        assert message in logger.get_logs()
        assert "INFO: Server exited cleanly" not in logger.get_logs()

    def test_serve_loop_error_is_not_a_clean_exit(self, logger, environ):
        """Test that a failing serve loop exits non-zero."""
        with patch(RUN_SERVER, new_callable=AsyncMock, side_effect=ConnectionResetError("boom")):
            exit_code = ServeCommand(logger).run(environ)

        assert exit_code == EXIT_FAILURE
        assert "WARNING: Server terminated: boom" in logger.get_logs()
        assert "INFO: Server exited cleanly" not in logger.get_logs()

    def test_oversized_numbers_use_defaults(self, logger):
        """Test that absurdly long numeric settings do not stop the service."""
        environ = {
            "DATABASE_URL": "sqlite://",
            "APP_PORT": "1" * 5000,
            "GRACEFUL_SHUTDOWN_TIMEOUT": "9" * 400,
        }
        with patch(RUN_SERVER, new_callable=AsyncMock) as run_server:
            exit_code = ServeCommand(logger).run(environ)

        assert exit_code == EXIT_OK
        config, _, coordinator = run_server.await_args.args
        assert config.port == 8080
        assert coordinator.drain_timeout == 10

    def test_interrupt_without_handlers_is_a_warning(self, logger, environ):
        with patch(RUN_SERVER, new_callable=AsyncMock, side_effect=KeyboardInterrupt):
            exit_code = ServeCommand(logger).run(environ)

        assert exit_code == EXIT_FAILURE
        assert "WARNING: Interrupted outside of graceful shutdown handling" in logger.get_logs()
        assert "INFO: Server exited cleanly" not in logger.get_logs()
