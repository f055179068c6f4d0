"""bootwatch Boot Orchestrator.

Waits for the Docker daemon, discovers always-restart containers and brings
each stopped one up in turn, then reports how many came up and how many did
not.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import sys
import time

from bootwatch.core.config import TIMEOUT_ENV_VAR, BootwatchConfig
from bootwatch.core.exceptions import ConfigurationError, DiscoveryError
from bootwatch.core.logging_config import setup_logging
from bootwatch.ports.runtime_ports import IContainerRuntime
from bootwatch.services.docker_runtime import DockerContainerRuntime
from bootwatch.supervisor.bring_up import BringUpOutcome, StartAndWaitSupervisor
from bootwatch.supervisor.discovery import Candidate, CandidateSelector
from bootwatch.supervisor.error_catalog import error_catalog
from bootwatch.supervisor.polling import Clock, Sleep
from bootwatch.supervisor.progress_reporter import (
    BootProgressReporter,
    ProgressPhase,
)
from bootwatch.supervisor.readiness import DaemonReadinessGate
from bootwatch.version import get_version

module_logger = logging.getLogger(__name__)

RUNNING_STATUS = "running"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


@dataclass
class RunOutcome:
    """Counters for one run; containers already running count in neither."""

    started_count: int = 0
    failed_count: int = 0
    elapsed_ms: float = 0.0


class BootOrchestrator:
    """Runs the readiness gate, discovery and per-container bring-up in sequence."""

    def __init__(
        self,
        runtime: IContainerRuntime,
        *,
        gate: DaemonReadinessGate | None = None,
        selector: CandidateSelector | None = None,
        supervisor: StartAndWaitSupervisor | None = None,
        reporter: BootProgressReporter | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            runtime: Container runtime shared by every component
            gate: Readiness gate (default built on ``runtime``)
            selector: Candidate selector (default built on ``runtime``)
            supervisor: Start-and-wait supervisor (default built on ``runtime``)
            reporter: Progress reporter (creates default if not provided)
            logger: Logger for per-candidate lines
        """
        self.runtime = runtime
        self.logger = logger or module_logger
        self.gate = gate or DaemonReadinessGate(runtime, logger=self.logger)
        self.selector = selector or CandidateSelector(runtime, logger=self.logger)
        self.supervisor = supervisor or StartAndWaitSupervisor(
            runtime, logger=self.logger
        )
        self.reporter = reporter or BootProgressReporter(logger=self.logger)

    @classmethod
    def from_config(
        cls,
        runtime: IContainerRuntime,
        config: BootwatchConfig,
        *,
        logger: logging.Logger | None = None,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> BootOrchestrator:
        """Build an orchestrator whose components use the configured intervals."""
        log = logger or module_logger
        return cls(
            runtime,
            gate=DaemonReadinessGate(
                runtime,
                interval=config.daemon_check_interval,
                logger=log,
                clock=clock,
                sleep=sleep,
            ),
            selector=CandidateSelector(
                runtime, restart_policy=config.restart_policy, logger=log
            ),
            supervisor=StartAndWaitSupervisor(
                runtime,
                poll_interval=config.poll_interval,
                logger=log,
                clock=clock,
                sleep=sleep,
            ),
            logger=log,
        )

    async def _audit(self, candidate: Candidate) -> None:
        """Log a post-start inspection line; has no effect on the counters."""
        try:
            snapshot = (await self.runtime.inspect(candidate.id)).snapshot
        except Exception as e:  # noqa: BLE001 - audit line only
            self.logger.warning(
                "Post-start inspection for container %s failed: %s",
                candidate.label,
                e,
            )
            return
        self.logger.info(
            "Post-start inspection for container %s - Status: %s",
            candidate.label,
            snapshot.status,
        )

    def _report_failed_bring_up(
        self, candidate: Candidate, result: BringUpOutcome
    ) -> None:
        """Point the operator at the catalog entry for a container left down."""
        code = "START_001" if result.start_failed else "START_002"
        info = error_catalog.get_error_info(code)
        title = info.title if info else code
        self.logger.warning(
            "Container %s left down (%s: %s)", candidate.label, code, title
        )
        self.logger.debug(
            "%s",
            error_catalog.format_error_help(
                code,
                context={
                    "container": candidate.label,
                    "last_status": result.last_status,
                },
            ),
        )

    async def run(
        self, timeout_seconds: int, *, announce: bool = True
    ) -> RunOutcome:
        """Bring every stopped always-restart container up.

        Args:
            timeout_seconds: Per-container wait budget in seconds
            announce: Write the start banner (the CLI has already written it)

        Returns:
            Started and failed counts plus the run duration

        Raises:
            ConfigurationError: If ``timeout_seconds`` is not positive
            DiscoveryError: If containers could not be listed or inspected
        """
        if timeout_seconds <= 0:
            msg = f"Invalid timeout value: {timeout_seconds}"
            raise ConfigurationError(msg, error_code="CONFIG_001")

        self.reporter.start_run(announce=announce)

        self.reporter.start_phase(ProgressPhase.WAITING_FOR_DAEMON)
        await self.gate.await_ready()

        self.reporter.start_phase(ProgressPhase.DISCOVERING)
        candidates = await self.selector.list_candidates()

        self.reporter.start_phase(ProgressPhase.SUPERVISING)
        outcome = RunOutcome()
        for candidate in candidates:
            self.logger.info("Inspecting container %s", candidate.label)

            if candidate.status == RUNNING_STATUS:
                self.logger.info(
                    "Container %s is already running. Status: %s",
                    candidate.label,
                    candidate.status,
                )
                continue

            self.logger.info(
                "Container %s is not running. Status: %s",
                candidate.label,
                candidate.status,
            )
            result = await self.supervisor.bring_up(candidate, timeout_seconds)
            await self._audit(candidate)

            if result.running:
                outcome.started_count += 1
            else:
                outcome.failed_count += 1
                self._report_failed_bring_up(candidate, result)

        outcome.elapsed_ms = self.reporter.elapsed_ms()
        self.reporter.report_summary(outcome)
        return outcome


# CLI entry point


async def run_bootwatch(config: BootwatchConfig) -> RunOutcome:
    """Run one supervision pass against the configured Docker daemon."""
    runtime = DockerContainerRuntime(
        base_url=config.docker_host or None, timeout=config.docker_api_timeout
    )
    orchestrator = BootOrchestrator.from_config(runtime, config)
    try:
        return await orchestrator.run(config.timeout, announce=False)
    except DiscoveryError as e:
        orchestrator.reporter.report_failure("container discovery failed", e)
        raise
    finally:
        runtime.close()
        summary = orchestrator.reporter.get_run_summary()
        module_logger.debug("Run summary: %s", summary)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    import argparse  # noqa: PLC0415 - Main function import

    parser = argparse.ArgumentParser(
        prog="bootwatch",
        description="Start Docker containers with restart policy 'always' at boot",
    )
    parser.add_argument(
        "timeout",
        nargs="?",
        default=None,
        help="Seconds to wait for each container to reach running (default 60)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    args = parser.parse_args(argv)

    # Defaults until the settings are validated.
    setup_logging(verbose=args.verbose)
    BootProgressReporter(logger=module_logger).announce_start()

    # Validate before any runtime interaction.
    config, errors = BootwatchConfig.validate_from_env(timeout=args.timeout)
    if config is None:
        timeout_invalid = any(
            error.split(":", 1)[0].upper() in {TIMEOUT_ENV_VAR, "TIMEOUT"}
            for error in errors
        )
        module_logger.error(
            "Invalid timeout value" if timeout_invalid else "Invalid configuration"
        )
        for error in errors:
            module_logger.error("  %s", error)
        code = "CONFIG_001" if timeout_invalid else "CONFIG_002"
        print(error_catalog.format_error_help(code), file=sys.stderr)  # noqa: T201
        return EXIT_CONFIG_ERROR

    setup_logging(config, verbose=args.verbose)
    module_logger.debug("Configuration: %s", config.get_startup_summary())

    try:
        asyncio.run(run_bootwatch(config))
    except KeyboardInterrupt:
        module_logger.warning("bootwatch cancelled")
        return EXIT_INTERRUPTED
    except DiscoveryError as e:
        help_text = error_catalog.format_error_help(e.error_code or "DISC_001")
        print(help_text, file=sys.stderr)  # noqa: T201
        return EXIT_FAILURE
    except Exception as e:
        module_logger.exception("Error: %s", e)
        code = getattr(e, "error_code", None)
        code = code or error_catalog.suggest_error_code(str(e))
        if code:
            print(error_catalog.format_error_help(code), file=sys.stderr)  # noqa: T201
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
