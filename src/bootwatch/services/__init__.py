"""bootwatch - Services Layer.

Adapters that implement the ports against real infrastructure.
"""

from bootwatch.services.docker_runtime import DockerContainerRuntime

__all__ = ["DockerContainerRuntime"]
