"""Logging configuration for the application."""

import logging
import sys

from vidtube.config import Settings

# Configure logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOGGER_NAMES = ("app", "database", "redis", "auth", "api", "storage")


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger and the named application loggers.

    Args:
        settings: Application settings (debug flag and environment)
    """
    logging.basicConfig(
        level=logging.INFO if not settings.debug else logging.DEBUG,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    level = logging.DEBUG if settings.debug and not settings.is_production else logging.INFO
    for name in _LOGGER_NAMES:
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


# Create loggers for different modules
app_logger = get_logger("app")
db_logger = get_logger("database")
redis_logger = get_logger("redis")
auth_logger = get_logger("auth")
api_logger = get_logger("api")
storage_logger = get_logger("storage")
