"""bootwatch configuration.

Pydantic-based settings with clear error messages. Values come from the
environment (or a ``.env`` file) and can be overridden by the command line.
"""

from __future__ import annotations

from enum import StrEnum
import logging
from typing import Any
from urllib.parse import urlparse

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60
DEFAULT_DAEMON_CHECK_INTERVAL = 3.0
DEFAULT_POLL_INTERVAL = 10.0
ALWAYS_RESTART_POLICY = "always"
TIMEOUT_ENV_VAR = "BOOTWATCH_TIMEOUT"

DOCKER_HOST_SCHEMES = {"unix", "tcp", "npipe", "http", "https", "ssh"}


class LogLevel(StrEnum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BootwatchConfig(BaseSettings):
    """Settings for a single bootwatch run."""

    timeout: int = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        description="Seconds to wait for each container to reach running",
        gt=0,
        alias=TIMEOUT_ENV_VAR,
    )
    daemon_check_interval: float = Field(
        default=DEFAULT_DAEMON_CHECK_INTERVAL,
        description="Seconds between Docker daemon liveness probes",
        gt=0,
        alias="BOOTWATCH_DAEMON_CHECK_INTERVAL",
    )
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        description="Seconds between container state polls",
        gt=0,
        alias="BOOTWATCH_POLL_INTERVAL",
    )
    restart_policy: str = Field(
        default=ALWAYS_RESTART_POLICY,
        description="Restart policy name selecting managed containers",
        min_length=1,
        alias="BOOTWATCH_RESTART_POLICY",
    )

    docker_host: str = Field(
        default="",
        description="Docker daemon URL (empty uses the SDK environment defaults)",
        alias="DOCKER_HOST",
    )
    docker_api_timeout: int = Field(
        default=60,
        description="Timeout in seconds for a single Docker API call",
        gt=0,
        le=600,
        alias="BOOTWATCH_DOCKER_API_TIMEOUT",
    )

    log_level: LogLevel = Field(
        default=LogLevel.INFO, description="Logging level", alias="LOG_LEVEL"
    )
    debug: bool = Field(default=False, description="Enable debug mode", alias="DEBUG")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("timeout", mode="before")
    @classmethod
    def reject_fractional_timeout(cls, v: Any) -> Any:
        """Timeouts are whole seconds; ``"1.5"`` is an error, not ``1``."""
        if isinstance(v, str):
            v = v.strip()
            if not v.lstrip("+-").isdigit():
                msg = f"Timeout must be a whole number of seconds, got {v!r}"
                raise ValueError(msg)
        return v

    @field_validator("docker_host")
    @classmethod
    def validate_docker_host(cls, v: str) -> str:
        """Validate Docker host URL format."""
        if v:
            parsed = urlparse(v)
            if parsed.scheme not in DOCKER_HOST_SCHEMES:
                msg = f"Invalid Docker host URL: {v}"
                raise ValueError(msg)
        return v

    def get_startup_summary(self) -> dict[str, Any]:
        """Get startup configuration summary."""
        return {
            "timeout": self.timeout,
            "daemon_check_interval": self.daemon_check_interval,
            "poll_interval": self.poll_interval,
            "restart_policy": self.restart_policy,
            "docker_host": self.docker_host or "<environment>",
            "log_level": self.log_level.value,
        }

    @classmethod
    def validate_from_env(
        cls, **overrides: Any
    ) -> tuple[BootwatchConfig | None, list[str]]:
        """Validate configuration from environment variables.

        Args:
            **overrides: Field values that take precedence over the environment,
                keyed by field name (e.g. ``timeout="30"`` from the command line)

        Returns:
            Tuple of (config, errors). Config is None if validation fails.
        """
        # Keyed by alias so init values and env values collide and init wins.
        values = {
            (cls.model_fields[key].alias or key): value
            for key, value in overrides.items()
            if value is not None
        }
        try:
            return cls(**values), []
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field_path = ".".join(str(loc) for loc in error["loc"])
                errors.append(f"{field_path}: {error['msg']}")
            return None, errors
