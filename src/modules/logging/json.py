from .base import BaseLogger


class JsonLogger(BaseLogger):
    """Logger that outputs JSON lines for log aggregators."""

    def handler_options(self):
        return {
            "serialize": True,
            "format": "{time} | {level} | {message}",
        }

    def log_request(self, method: str, path: str, status_code: int, duration_ms: float):
        self.logger.bind(
            type="request",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration_ms, 2)
        ).debug(f"{method} {path} {status_code}")

    def log_warning(self, message: str):
        self.logger.bind(type="warning").warning(message)

    def log_info(self, message: str):
        self.logger.bind(type="info").info(message)

    def log_debug(self, message: str):
        self.logger.bind(type="debug").debug(message)
