from .base import BaseLogger


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for container logs."""

    def handler_options(self):
        return {
            "format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
            "colorize": False,
        }

    def log_request(self, method: str, path: str, status_code: int, duration_ms: float):
        self.logger.debug(f"{method} {path} {status_code} {duration_ms:.2f}ms")

    def log_warning(self, message: str):
        self.logger.warning(message)

    def log_info(self, message: str):
        self.logger.info(message)

    def log_debug(self, message: str):
        self.logger.debug(message)
