"""bootwatch Error Catalog.

Catalog of run errors with operator-facing causes and solutions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ErrorCategory(StrEnum):
    """Error categories for organization."""

    CONFIGURATION = "configuration"
    DAEMON = "daemon"
    DISCOVERY = "discovery"
    CONTAINER = "container"


class ErrorSeverity(StrEnum):
    """Error severity levels."""

    CRITICAL = "critical"  # Aborts the run
    HIGH = "high"  # A container stays down
    MEDIUM = "medium"  # Run is delayed


@dataclass
class ErrorSolution:
    """Suggested solution for an error."""

    description: str
    steps: list[str]
    documentation_links: list[str] = field(default_factory=list)


@dataclass
class RunErrorInfo:
    """Comprehensive error information."""

    code: str
    title: str
    description: str
    category: ErrorCategory
    severity: ErrorSeverity
    solutions: list[ErrorSolution]
    common_causes: list[str]
    related_errors: list[str] = field(default_factory=list)


class RunErrorCatalog:
    """Catalog of run errors with solutions."""

    def __init__(self) -> None:
        self.errors: dict[str, RunErrorInfo] = self._build_error_catalog()

    def _build_error_catalog(self) -> dict[str, RunErrorInfo]:
        errors = {}

        errors["CONFIG_001"] = RunErrorInfo(
            code="CONFIG_001",
            title="Invalid Timeout",
            description="The timeout must be a positive whole number of seconds.",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Non-numeric command line argument",
                "Zero or negative timeout",
                "Fractional value in BOOTWATCH_TIMEOUT",
            ],
            solutions=[
                ErrorSolution(
                    description="Pass a valid timeout",
                    steps=[
                        "Run 'bootwatch 120' for a 120 second timeout",
                        "Or omit the argument to use the default of 60 seconds",
                    ],
                ),
            ],
            related_errors=["CONFIG_002"],
        )

        errors["CONFIG_002"] = RunErrorInfo(
            code="CONFIG_002",
            title="Invalid Configuration Value",
            description="An environment variable has an invalid value or format.",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Invalid DOCKER_HOST URL",
                "Non-positive poll or daemon check interval",
                "Invalid LOG_LEVEL",
            ],
            solutions=[
                ErrorSolution(
                    description="Fix the invalid configuration value",
                    steps=[
                        "Check the error message for the offending variable",
                        "Update the environment or .env file",
                        "Re-run bootwatch",
                    ],
                ),
            ],
        )

        errors["DAEMON_001"] = RunErrorInfo(
            code="DAEMON_001",
            title="Docker Daemon Unreachable",
            description="The Docker daemon does not answer ping requests.",
            category=ErrorCategory.DAEMON,
            severity=ErrorSeverity.MEDIUM,
            common_causes=[
                "Docker service has not finished starting",
                "Docker service is disabled",
                "DOCKER_HOST points at the wrong socket",
                "Permission denied on /var/run/docker.sock",
            ],
            solutions=[
                ErrorSolution(
                    description="Make the daemon reachable",
                    steps=[
                        "Check 'systemctl status docker'",
                        "Verify DOCKER_HOST or the default socket path",
                        "Run bootwatch as a user in the docker group",
                    ],
                    documentation_links=[
                        "https://docs.docker.com/engine/daemon/troubleshoot/"
                    ],
                ),
            ],
        )

        errors["DISC_001"] = RunErrorInfo(
            code="DISC_001",
            title="Container Discovery Failed",
            description=(
                "Listing or inspecting containers failed, so no candidates are known."
            ),
            category=ErrorCategory.DISCOVERY,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Daemon went away after answering the first ping",
                "Container removed between listing and inspection",
                "API call timed out",
            ],
            solutions=[
                ErrorSolution(
                    description="Re-run once the daemon is stable",
                    steps=[
                        "Check 'docker ps -a' works",
                        "Raise BOOTWATCH_DOCKER_API_TIMEOUT on slow hosts",
                        "Re-run bootwatch",
                    ],
                ),
            ],
            related_errors=["DAEMON_001"],
        )

        errors["START_001"] = RunErrorInfo(
            code="START_001",
            title="Container Start Failed",
            description="The start command for a container was rejected.",
            category=ErrorCategory.CONTAINER,
            severity=ErrorSeverity.HIGH,
            common_causes=[
                "Port already allocated",
                "Missing volume or bind mount source",
                "Image removed",
            ],
            solutions=[
                ErrorSolution(
                    description="Inspect the container",
                    steps=[
                        "Run 'docker start <name>' to see the full error",
                        "Check 'docker logs <name>'",
                    ],
                ),
            ],
            related_errors=["START_002"],
        )

        errors["START_002"] = RunErrorInfo(
            code="START_002",
            title="Container Start Timed Out",
            description="A container did not report running within the timeout.",
            category=ErrorCategory.CONTAINER,
            severity=ErrorSeverity.HIGH,
            common_causes=[
                "Container exits immediately after start",
                "Start command failed earlier",
                "Timeout too short for a slow container",
            ],
            solutions=[
                ErrorSolution(
                    description="Give the container more time or fix its entrypoint",
                    steps=[
                        "Pass a longer timeout, e.g. 'bootwatch 180'",
                        "Check 'docker logs <name>' for crash output",
                    ],
                ),
            ],
            related_errors=["START_001"],
        )

        return errors

    def get_error_info(self, error_code: str) -> RunErrorInfo | None:
        """Get error information by code."""
        return self.errors.get(error_code)

    def suggest_error_code(self, error_message: str) -> str | None:
        """Suggest error code based on error message content."""
        error_message_lower = error_message.lower()

        if "timeout" in error_message_lower and "second" in error_message_lower:
            return "CONFIG_001"
        if "not available" in error_message_lower or "ping" in error_message_lower:
            return "DAEMON_001"
        if "list" in error_message_lower or "inspect" in error_message_lower:
            return "DISC_001"
        if "within" in error_message_lower:
            return "START_002"
        if "start" in error_message_lower:
            return "START_001"
        return None

    def format_error_help(
        self, error_code: str, context: dict[str, str] | None = None
    ) -> str:
        """Format error help message."""
        error_info = self.get_error_info(error_code)
        if not error_info:
            return f"Unknown error code: {error_code}"

        lines: list[str] = [
            f"{error_info.title} ({error_info.code})",
            f"Description: {error_info.description}",
            f"Severity: {error_info.severity.value.upper()}",
        ]

        if error_info.common_causes:
            lines.append("Common Causes:")
            lines.extend(f"  - {cause}" for cause in error_info.common_causes)

        if error_info.solutions:
            lines.append("Solutions:")
            for i, solution in enumerate(error_info.solutions, 1):
                lines.append(f"  {i}. {solution.description}")
                lines.extend(f"     - {step}" for step in solution.steps)
                lines.extend(
                    f"     See: {link}" for link in solution.documentation_links
                )

        if context:
            lines.append("Context:")
            lines.extend(f"  - {key}: {value}" for key, value in context.items())

        if error_info.related_errors:
            lines.append("Related Errors:")
            for related_code in error_info.related_errors:
                related_error = self.get_error_info(related_code)
                if related_error:
                    lines.append(f"  - {related_code}: {related_error.title}")

        return "\n".join(lines)


# Global error catalog instance
error_catalog = RunErrorCatalog()
