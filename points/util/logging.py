"""Standard-library logging setup.

Ledger events are recorded through logfire. Plain ``logging`` is still used
by the HTTP error handlers, the migration runner and third-party libraries,
so it gets one consistent stdout format here.
"""

import logging
import sys

from points.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Libraries that are too chatty at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg", "uvicorn.access")


def level_for(settings: Settings) -> int:
    """Log level for the configured environment."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Route standard-library logging to stdout.

    Args:
        settings: Application settings
    """
    level = level_for(settings)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    get_logger(__name__).info(
        "Logging ready (%s, %s)", settings.environment, logging.getLevelName(level)
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually called with ``__name__``."""
    return logging.getLogger(name)
