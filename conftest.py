"""Global pytest configuration for logging setup.

Keeps every bootwatch logger propagating at DEBUG so caplog sees the lines
components write, whatever an earlier test did to the logging tree.
"""

import logging

import pytest

BOOTWATCH_LOGGERS = [
    "bootwatch",
    "bootwatch.supervisor",
    "bootwatch.services",
    "bootwatch.core",
]


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Reset bootwatch loggers to a caplog-friendly state."""
    for logger_name in BOOTWATCH_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        # setup_logging() in the CLI turns propagation off
        logger.propagate = True

    logging.getLogger().setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def configure_caplog(caplog: pytest.LogCaptureFixture) -> None:
    """Capture DEBUG records from all bootwatch modules."""
    caplog.set_level(logging.DEBUG)
    for logger_name in BOOTWATCH_LOGGERS:
        caplog.set_level(logging.DEBUG, logger=logger_name)
