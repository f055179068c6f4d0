"""bootwatch - boot-time container supervisor.

Waits for the Docker daemon, then brings every container with an ``always``
restart policy back to the running state.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
