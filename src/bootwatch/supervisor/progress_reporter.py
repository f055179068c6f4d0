"""bootwatch run progress reporter.

Tracks which phase a run is in and writes the banner and summary lines.
"""

from __future__ import annotations

from enum import StrEnum
import logging
import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bootwatch.supervisor.orchestrator import RunOutcome

module_logger = logging.getLogger(__name__)

APP_NAME = "docker-bootwatch"


class ProgressPhase(StrEnum):
    """Run progress phases."""

    INITIALIZING = "initializing"
    WAITING_FOR_DAEMON = "waiting_for_daemon"
    DISCOVERING = "discovering"
    SUPERVISING = "supervising"
    COMPLETE = "complete"
    FAILED = "failed"


def format_duration(duration_ms: float) -> str:
    """Render a duration for the summary."""
    return f"{duration_ms:.0f} ms"


class BootProgressReporter:
    """Reports run progress through a logger."""

    def __init__(
        self, logger: logging.Logger | None = None, app_name: str = APP_NAME
    ) -> None:
        self.logger = logger or module_logger
        self.app_name = app_name
        self.current_phase = ProgressPhase.INITIALIZING
        self.phase_history: list[ProgressPhase] = []
        self.start_time = time.time()
        self.end_time: float | None = None

    def announce_start(self) -> None:
        """Write the start banner."""
        self.logger.info("Starting %s...", self.app_name)

    def start_run(self, *, announce: bool = True) -> None:
        """Mark the beginning of a run.

        Args:
            announce: Write the start banner; the CLI writes it itself before
                validating configuration
        """
        self.start_time = time.time()
        self.end_time = None
        self.phase_history = [ProgressPhase.INITIALIZING]
        self.current_phase = ProgressPhase.INITIALIZING
        if announce:
            self.announce_start()

    def start_phase(self, phase: ProgressPhase) -> None:
        """Enter a new phase."""
        self.current_phase = phase
        self.phase_history.append(phase)
        self.logger.debug("Run phase: %s", phase.value.replace("_", " "))

    def elapsed_ms(self) -> float:
        """Milliseconds since ``start_run`` (or until the run ended)."""
        end = self.end_time if self.end_time is not None else time.time()
        return (end - self.start_time) * 1000

    def report_summary(self, outcome: RunOutcome) -> None:
        """Write the end-of-run summary."""
        self.end_time = time.time()
        self.start_phase(ProgressPhase.COMPLETE)
        self.logger.info("Ending %s...", self.app_name)
        self.logger.info("Summary:")
        self.logger.info("  Started containers: %d", outcome.started_count)
        self.logger.info("  Failed containers: %d", outcome.failed_count)
        self.logger.info("  Execution time: %s", format_duration(outcome.elapsed_ms))

    def report_failure(self, message: str, error: BaseException | None = None) -> None:
        """Write the line for an aborted run."""
        self.end_time = time.time()
        self.start_phase(ProgressPhase.FAILED)
        if error is not None:
            self.logger.error("Error: %s", error)
        self.logger.error(
            "%s aborted after %s: %s",
            self.app_name,
            format_duration(self.elapsed_ms()),
            message,
        )

    def get_run_summary(self) -> dict[str, Any]:
        """Phase bookkeeping for diagnostics."""
        return {
            "total_duration_ms": self.elapsed_ms(),
            "final_phase": self.current_phase.value,
            "phases": [phase.value for phase in self.phase_history],
            "success": self.current_phase == ProgressPhase.COMPLETE,
        }
