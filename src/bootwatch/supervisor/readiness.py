"""Daemon readiness gate.

Blocks until the container runtime answers a liveness probe. There is no
attempt limit: if the daemon never comes up, bootwatch waits forever.
"""

from __future__ import annotations

import asyncio
import logging
import time

from bootwatch.core.config import DEFAULT_DAEMON_CHECK_INTERVAL
from bootwatch.ports.runtime_ports import IContainerRuntime
from bootwatch.supervisor.error_catalog import error_catalog
from bootwatch.supervisor.polling import Clock, Sleep, poll_until

module_logger = logging.getLogger(__name__)


class DaemonReadinessGate:
    """Waits for the runtime daemon with an unbounded fixed-interval retry."""

    def __init__(
        self,
        runtime: IContainerRuntime,
        *,
        interval: float = DEFAULT_DAEMON_CHECK_INTERVAL,
        logger: logging.Logger | None = None,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.runtime = runtime
        self.interval = interval
        self.logger = logger or module_logger
        self.clock = clock
        self.sleep = sleep
        self.attempts = 0

    async def _probe(self) -> bool:
        self.attempts += 1
        try:
            await self.runtime.ping()
        except Exception as e:  # noqa: BLE001 - any probe failure means "not yet"
            self.logger.warning(
                "Docker is not available. Retrying in %g seconds...", self.interval
            )
            self.logger.debug("Ping attempt %d failed: %s", self.attempts, e)
            if self.attempts == 1:
                self.logger.debug("%s", error_catalog.format_error_help("DAEMON_001"))
            return False
        self.logger.info("Docker is available.")
        return True

    async def await_ready(self) -> None:
        """Return once the daemon answers; never raises for an unavailable daemon."""
        self.attempts = 0
        await poll_until(
            self._probe, interval=self.interval, clock=self.clock, sleep=self.sleep
        )
