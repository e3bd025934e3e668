import click
from .base import BaseLogger


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for interactive terminals."""

    def handler_options(self):
        return {
            "colorize": True,
            "format": "<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                      "<level>{level: <8}</level> | "
                      "<white>{message}</white>",
        }

    def log_request(self, method: str, path: str, status_code: int, duration_ms: float):
        if status_code >= 500:
            color = "red"
        elif status_code >= 400:
            color = "yellow"
        elif status_code >= 300:
            color = "blue"
        else:
            color = "green"

        self.logger.debug(
            click.style(f"{method} {path} ", fg="white")
            + click.style(str(status_code), fg=color, bold=True)
            + click.style(f" {duration_ms:.2f}ms", fg="white")
        )

    def log_warning(self, message: str):
        self.logger.warning(click.style(message, fg="yellow", bold=True))

    def log_info(self, message: str):
        self.logger.info(click.style(message, fg="white"))

    def log_debug(self, message: str):
        self.logger.debug(click.style(message, fg="blue"))
