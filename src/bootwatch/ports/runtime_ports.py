"""Container runtime port interface.

Defines the contract the supervisor components depend on. The Docker adapter
in ``bootwatch.services`` implements it for production; tests use an
in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Live state of a container at the moment it was inspected."""

    running: bool
    status: str


@dataclass(frozen=True)
class ContainerSummary:
    """One row of the runtime's container listing."""

    id: str
    names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ContainerInspection:
    """Subset of a container inspection the supervisor cares about."""

    id: str
    names: list[str]
    restart_policy_name: str
    running: bool
    status: str

    @property
    def snapshot(self) -> RuntimeSnapshot:
        """State part of the inspection."""
        return RuntimeSnapshot(running=self.running, status=self.status)


class IContainerRuntime(ABC):
    """Abstract container runtime.

    All operations raise ``ContainerRuntimeError`` on failure; callers decide
    whether the failure is fatal.
    """

    @abstractmethod
    async def ping(self) -> None:
        """Probe the runtime daemon.

        Raises:
            RuntimeUnavailableError: If the daemon does not answer
        """

    @abstractmethod
    async def list_containers(
        self, *, include_stopped: bool = True
    ) -> list[ContainerSummary]:
        """List containers in the runtime's own order.

        Args:
            include_stopped: Also list containers that are not running
        """

    @abstractmethod
    async def inspect(self, container_id: str) -> ContainerInspection:
        """Fetch a fresh inspection of one container.

        Args:
            container_id: Full or truncated container identifier
        """

    @abstractmethod
    async def start(self, container_id: str) -> None:
        """Ask the runtime to start a container.

        Args:
            container_id: Full or truncated container identifier
        """
