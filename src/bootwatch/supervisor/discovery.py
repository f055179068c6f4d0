"""Candidate selection.

Finds every container, running or not, whose restart policy is ``always``.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from bootwatch.core.config import ALWAYS_RESTART_POLICY
from bootwatch.core.exceptions import ContainerRuntimeError, DiscoveryError
from bootwatch.ports.runtime_ports import IContainerRuntime

module_logger = logging.getLogger(__name__)

SHORT_ID_LENGTH = 12


def short_id(container_id: str) -> str:
    """Truncate a container identifier the way ``docker ps`` shows it."""
    return container_id[:SHORT_ID_LENGTH]


@dataclass(frozen=True)
class Candidate:
    """A container selected for supervision.

    ``status`` is the state seen during discovery and goes stale as soon as
    the supervisor acts; liveness decisions always re-inspect.
    """

    id: str
    name: str
    status: str

    @property
    def label(self) -> str:
        """``name (id)`` as used in log lines."""
        return f"{self.name} ({self.id})"


class CandidateSelector:
    """Lists containers and keeps those with the configured restart policy."""

    def __init__(
        self,
        runtime: IContainerRuntime,
        *,
        restart_policy: str = ALWAYS_RESTART_POLICY,
        logger: logging.Logger | None = None,
    ) -> None:
        self.runtime = runtime
        self.restart_policy = restart_policy
        self.logger = logger or module_logger

    async def list_candidates(self) -> list[Candidate]:
        """Return candidates in the runtime's listing order.

        Raises:
            DiscoveryError: If listing or any inspection fails
        """
        try:
            containers = await self.runtime.list_containers(include_stopped=True)
        except ContainerRuntimeError as e:
            self.logger.error("Error getting containers: %s", e)
            msg = f"Could not list containers: {e}"
            raise DiscoveryError(msg) from e

        candidates: list[Candidate] = []
        for container in containers:
            try:
                inspection = await self.runtime.inspect(container.id)
            except ContainerRuntimeError as e:
                self.logger.error("Error getting containers: %s", e)
                msg = f"Could not inspect container {short_id(container.id)}: {e}"
                raise DiscoveryError(msg, container_id=container.id) from e

            if inspection.restart_policy_name != self.restart_policy:
                self.logger.debug(
                    "Skipping container %s with restart policy '%s'",
                    short_id(container.id),
                    inspection.restart_policy_name or "no",
                )
                continue

            names = container.names or inspection.names
            candidates.append(
                Candidate(
                    id=short_id(container.id),
                    name=names[0] if names else short_id(container.id),
                    status=inspection.status,
                )
            )

        self.logger.info(
            "Found %d containers with restart policy '%s'.",
            len(candidates),
            self.restart_policy,
        )
        return candidates
