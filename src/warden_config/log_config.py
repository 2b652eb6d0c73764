"""Logging setup shared by every process that hosts the warden services."""

import logging
import sys
from functools import lru_cache

from warden_config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGERS = ("warden_auth", "warden_identity", "warden_config")
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


@lru_cache(maxsize=1)
def configure_logging(log_level: str | None = None) -> None:
    """Configure application logging.

    Sets up logging for the warden packages with:
    - Console output with timestamps and module names
    - Configurable log level for warden modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    level_name = (log_level or get_settings().log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
