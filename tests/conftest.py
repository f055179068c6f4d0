"""Shared test fixtures for the bootwatch test suite."""

from __future__ import annotations

import os

from dotenv import load_dotenv
import pytest

from bootwatch.supervisor.progress_reporter import BootProgressReporter
from tests.fakes.runtime import FakeClock, FakeContainerRuntime

# Developer-local overrides; not version controlled.
load_dotenv(".env.test")

# Keep a developer's DOCKER_HOST from leaking into config tests.
os.environ.pop("DOCKER_HOST", None)


@pytest.fixture
def clock() -> FakeClock:
    """Simulated monotonic clock whose sleep advances time."""
    return FakeClock()


@pytest.fixture
def runtime() -> FakeContainerRuntime:
    """Empty in-memory container runtime."""
    return FakeContainerRuntime()


@pytest.fixture
def reporter() -> BootProgressReporter:
    """Progress reporter using the default logger."""
    return BootProgressReporter()
