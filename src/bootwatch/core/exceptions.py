"""Exception hierarchy for bootwatch.

Only configuration and discovery errors ever abort a run. Runtime errors
raised while probing the daemon or starting a single container are caught by
the supervisor components and surface as log lines.
"""

from __future__ import annotations

from typing import Any


class BootwatchError(Exception):
    """Base class for all bootwatch errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(BootwatchError):
    """Invalid timeout or settings, detected before touching the runtime."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[str] | None = None,
        error_code: str = "CONFIG_002",
    ) -> None:
        super().__init__(
            message, error_code=error_code, details={"errors": errors or []}
        )
        self.errors = errors or []


class ContainerRuntimeError(BootwatchError):
    """A call against the container runtime failed."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        container_id: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"operation": operation}
        if container_id:
            details["container_id"] = container_id
        super().__init__(message, details=details)
        self.operation = operation
        self.container_id = container_id


class RuntimeUnavailableError(ContainerRuntimeError):
    """The runtime daemon did not answer the liveness probe."""

    def __init__(self, message: str) -> None:
        super().__init__(message, operation="ping")
        self.error_code = "DAEMON_001"


class DiscoveryError(BootwatchError):
    """Listing or inspecting containers failed while selecting candidates."""

    def __init__(self, message: str, *, container_id: str | None = None) -> None:
        details = {"container_id": container_id} if container_id else {}
        super().__init__(message, error_code="DISC_001", details=details)
        self.container_id = container_id
