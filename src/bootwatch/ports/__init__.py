"""Ports layer - interfaces the supervisor depends on.

The supervisor components talk to the container runtime only through
``IContainerRuntime``; concrete adapters live in ``bootwatch.services``.
"""

from bootwatch.ports.runtime_ports import (
    ContainerInspection,
    ContainerSummary,
    IContainerRuntime,
    RuntimeSnapshot,
)

__all__ = [
    "ContainerInspection",
    "ContainerSummary",
    "IContainerRuntime",
    "RuntimeSnapshot",
]
