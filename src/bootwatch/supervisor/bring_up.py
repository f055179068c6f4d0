"""Start-and-wait supervision of a single container.

Best-effort start, verify by observation: a failed start command is logged
and the container is still polled, so it resolves as timed out unless
something else brings it up.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import time

from bootwatch.core.config import DEFAULT_POLL_INTERVAL
from bootwatch.ports.runtime_ports import IContainerRuntime
from bootwatch.supervisor.discovery import Candidate
from bootwatch.supervisor.polling import Clock, Sleep, poll_until

module_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BringUpOutcome:
    """Result of one start-and-wait cycle."""

    running: bool
    last_status: str = "unknown"
    start_failed: bool = False
    polls: int = 0
    elapsed_seconds: float = 0.0


class StartAndWaitSupervisor:
    """Starts a container and polls it until running or timed out."""

    def __init__(
        self,
        runtime: IContainerRuntime,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        logger: logging.Logger | None = None,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.runtime = runtime
        self.poll_interval = poll_interval
        self.logger = logger or module_logger
        self.clock = clock
        self.sleep = sleep

    async def _start(self, candidate: Candidate) -> bool:
        self.logger.info("Attempting to start container: %s", candidate.label)
        try:
            await self.runtime.start(candidate.id)
        except Exception as e:  # noqa: BLE001 - one container must not abort the run
            self.logger.error("Failed to start container %s: %s", candidate.label, e)
            return False
        self.logger.info("Started container: %s", candidate.label)
        return True

    async def bring_up(
        self, candidate: Candidate, timeout_seconds: float
    ) -> BringUpOutcome:
        """Start ``candidate`` and wait for it to report running.

        Never raises; every failure ends in ``running=False`` plus a log line.

        Args:
            candidate: Container to bring up
            timeout_seconds: Positive wait budget, validated by the caller

        Returns:
            Outcome with ``running`` True only if a fresh inspection saw it running
        """
        started_at = self.clock()
        start_ok = await self._start(candidate)

        deadline = self.clock() + timeout_seconds
        polls = 0
        last_status = candidate.status

        async def is_running() -> bool:
            nonlocal polls, last_status
            polls += 1
            try:
                snapshot = (await self.runtime.inspect(candidate.id)).snapshot
            except Exception as e:  # noqa: BLE001 - treated as "not running yet"
                self.logger.error(
                    "Could not inspect container %s: %s", candidate.label, e
                )
                return False

            last_status = snapshot.status
            self.logger.info(
                "Container %s status: %s", candidate.label, snapshot.status
            )
            if snapshot.running:
                self.logger.info("Container %s is running.", candidate.label)
                return True
            self.logger.warning(
                "Container %s is not running. Retrying in %g seconds...",
                candidate.label,
                self.poll_interval,
            )
            return False

        try:
            running = await poll_until(
                is_running,
                interval=self.poll_interval,
                deadline=deadline,
                clock=self.clock,
                sleep=self.sleep,
            )
        except Exception as e:  # noqa: BLE001 - bring_up never raises
            self.logger.error(
                "Unexpected error while waiting for container %s: %s",
                candidate.label,
                e,
            )
            running = False
        else:
            if not running:
                self.logger.error(
                    "Failed to start container %s within %g seconds.",
                    candidate.label,
                    timeout_seconds,
                )

        return BringUpOutcome(
            running=running,
            last_status=last_status,
            start_failed=not start_ok,
            polls=polls,
            elapsed_seconds=self.clock() - started_at,
        )
