"""Docker implementation of the container runtime port.

Uses the ``docker`` SDK's low-level API client. Every SDK call blocks, so each
one runs in a worker thread via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging
from typing import Any, TypeVar

import docker
from docker.errors import DockerException

from bootwatch.core.exceptions import ContainerRuntimeError, RuntimeUnavailableError
from bootwatch.ports.runtime_ports import (
    ContainerInspection,
    ContainerSummary,
    IContainerRuntime,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# requests' connection errors derive from OSError and are not always wrapped
# by the SDK.
RUNTIME_ERRORS = (DockerException, OSError)


def parse_inspection(container_id: str, data: dict[str, Any]) -> ContainerInspection:
    """Map a raw ``inspect_container`` payload onto ``ContainerInspection``."""
    host_config = data.get("HostConfig") or {}
    restart_policy = host_config.get("RestartPolicy") or {}
    state = data.get("State") or {}
    name = data.get("Name")
    return ContainerInspection(
        id=data.get("Id") or container_id,
        names=[name] if name else [],
        restart_policy_name=restart_policy.get("Name") or "",
        running=bool(state.get("Running", False)),
        status=state.get("Status") or "unknown",
    )


class DockerContainerRuntime(IContainerRuntime):
    """Container runtime backed by the Docker Engine API."""

    def __init__(
        self,
        client: docker.DockerClient | None = None,
        *,
        base_url: str | None = None,
        timeout: int = 60,
    ) -> None:
        """Initialize the adapter.

        Args:
            client: Pre-built client; when omitted one is created lazily so
                that an unreachable daemon surfaces as a failed ping
            base_url: Docker daemon URL (``None`` reads ``DOCKER_HOST`` etc.)
            timeout: Timeout in seconds for each API call
        """
        self._client = client
        self.base_url = base_url
        self.timeout = timeout

    def _create_client(self) -> docker.DockerClient:
        if self.base_url:
            return docker.DockerClient(base_url=self.base_url, timeout=self.timeout)
        return docker.from_env(timeout=self.timeout)

    def _get_client(self) -> docker.DockerClient:
        if self._client is None:
            self._client = self._create_client()
            logger.debug("Docker client created for %s", self.base_url or "environment")
        return self._client

    async def _call(
        self,
        operation: str,
        func: Callable[[docker.DockerClient], T],
        container_id: str | None = None,
    ) -> T:
        def run() -> T:
            return func(self._get_client())

        try:
            return await asyncio.to_thread(run)
        except RUNTIME_ERRORS as e:
            target = f" {container_id}" if container_id else ""
            msg = f"Docker {operation}{target} failed: {e}"
            raise ContainerRuntimeError(
                msg, operation=operation, container_id=container_id
            ) from e

    async def ping(self) -> None:
        try:
            await self._call("ping", lambda client: client.ping())
        except ContainerRuntimeError as e:
            # Drop a half-initialised client so the next probe starts fresh.
            self._client = None
            raise RuntimeUnavailableError(e.message) from e

    async def list_containers(
        self, *, include_stopped: bool = True
    ) -> list[ContainerSummary]:
        rows = await self._call(
            "list", lambda client: client.api.containers(all=include_stopped)
        )
        return [
            ContainerSummary(id=row["Id"], names=list(row.get("Names") or []))
            for row in rows
        ]

    async def inspect(self, container_id: str) -> ContainerInspection:
        data = await self._call(
            "inspect",
            lambda client: client.api.inspect_container(container_id),
            container_id,
        )
        return parse_inspection(container_id, data)

    async def start(self, container_id: str) -> None:
        await self._call(
            "start", lambda client: client.api.start(container_id), container_id
        )

    def close(self) -> None:
        """Release the underlying HTTP session."""
        if self._client is not None:
            self._client.close()
            self._client = None
