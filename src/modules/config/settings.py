"""Service settings read from environment variables.

``DATABASE_URL`` is required. ``APP_PORT`` and ``GRACEFUL_SHUTDOWN_TIMEOUT``
are optional and fall back to their defaults silently when malformed or
out of range.
"""

import re
import threading
from typing import Any, ClassVar, Mapping, Optional, Tuple

from pydantic import (
    Field,
    SecretStr,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .errors import MissingConfigError

DEFAULT_PORT = 8080
DEFAULT_SHUTDOWN_TIMEOUT = 10
MAX_PORT = 65535
MAX_SHUTDOWN_TIMEOUT = 2**64 - 1

# Optional plus sign, then no more digits than the widest accepted value.
_DECIMAL = re.compile(r"\+?([0-9]{1,20})")

# Thread-local flag: read only the mapping passed to from_env().
_tls = threading.local()


class ServiceConfig(BaseSettings):
    """Process-lifetime configuration, immutable once loaded."""

    model_config = SettingsConfigDict(frozen=True, case_sensitive=True)

    ENV_NAMES: ClassVar[Tuple[str, ...]] = (
        "DATABASE_URL",
        "APP_HOST",
        "APP_PORT",
        "GRACEFUL_SHUTDOWN_TIMEOUT",
    )

    database_url: SecretStr = Field(validation_alias="DATABASE_URL")
    host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=MAX_PORT, validation_alias="APP_PORT")
    graceful_shutdown_timeout: int = Field(
        default=DEFAULT_SHUTDOWN_TIMEOUT,
        ge=0,
        le=MAX_SHUTDOWN_TIMEOUT,
        validation_alias="GRACEFUL_SHUTDOWN_TIMEOUT",
    )

    @field_validator("port", "graceful_shutdown_timeout", mode="wrap")
    @classmethod
    def _default_when_invalid(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> int:
        default = cls.model_fields[info.field_name].default
        if isinstance(value, str):
            match = _DECIMAL.fullmatch(value)
            if match is None:
                return default
            value = int(match.group(1))
        try:
            return handler(value)
        except ValidationError:
            return default

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        if getattr(_tls, "environ_only", False):
            return (init_settings,)
        return (init_settings, env_settings)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ServiceConfig':
        """Build the configuration from environment variables.

        Args:
            environ: Mapping to read from instead of ``os.environ``

        Raises:
            MissingConfigError: If ``DATABASE_URL`` is not set
        """
        try:
            if environ is None:
                return cls()

            _tls.environ_only = True
            try:
                return cls(**{name: environ[name] for name in cls.ENV_NAMES if name in environ})
            finally:
                _tls.environ_only = False
        except ValidationError as e:
            if any(error["type"] == "missing" for error in e.errors()):
                raise MissingConfigError("DATABASE_URL") from e
            raise

    @property
    def listen_url(self) -> str:
        return f"http://{self.host}:{self.port}"
