"""bootwatch - Logging Configuration.

One console stream, one line per event. The entry point owns the process-wide
configuration; components only ever receive a logger.
"""

import logging
import logging.config
import sys
from typing import Any

from bootwatch.core.config import BootwatchConfig

# Configure logger
logger = logging.getLogger(__name__)

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    settings: BootwatchConfig | None = None, *, verbose: bool = False
) -> None:
    """Configure logging for the process.

    Args:
        settings: Validated settings; ``None`` configures INFO-level defaults so
            configuration errors can still be reported
        verbose: Force DEBUG level regardless of settings
    """
    level = settings.log_level.value if settings else "INFO"
    if verbose:
        level = "DEBUG"
    debug = bool(settings and settings.debug)

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": (
                    "[%(asctime)s:%(msecs)03d] [%(levelname)s] "
                    "%(name)s:%(lineno)d | %(funcName)s | %(message)s"
                ),
                "datefmt": LOG_DATE_FORMAT,
            },
            "simple": {
                "format": "[%(asctime)s:%(msecs)03d] [%(levelname)s] %(message)s",
                "datefmt": LOG_DATE_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if debug else "simple",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "bootwatch": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
            # The Docker SDK and urllib3 are chatty at DEBUG.
            "docker": {"level": "WARNING"},
            "urllib3": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(logging_config)

    logger.debug("Logging configured with level %s", level)
