# logger.py
"""
Logging configuration for the Padel Duplas app.

This module provides centralized logging setup. The setup_logging() function
should be called once at application startup (e.g., in 1_Setup.py).

All app modules should use the "app" namespace:
    import logging
    logger = logging.getLogger("app.module_name")

This keeps third-party library logs quiet while allowing granular control
over the app's own logging level via the LOG_LEVEL environment variable.
"""

import logging
import sys

from constants import DEFAULT_LOG_LEVEL

# App namespace prefix - all app loggers should use this
APP_LOGGER_NAME = "app"


def get_default_level() -> int:
    """Resolves LOG_LEVEL (name or number) to a logging level, falling back to INFO."""
    level = logging.getLevelName(DEFAULT_LOG_LEVEL.upper())
    if isinstance(level, int):
        return level
    if DEFAULT_LOG_LEVEL.isdigit():
        return int(DEFAULT_LOG_LEVEL)
    return logging.INFO


def setup_logging(app_level: int | None = None) -> None:
    """
    Configure logging for the application.

    - Root logger is set to WARNING (keeps third-party libraries quiet)
    - App namespace logger ("app.*") is set to the specified level

    This should be called ONCE at application startup (entry point).

    Args:
        app_level: The logging level for app modules (default: LOG_LEVEL env, else INFO)
    """
    if app_level is None:
        app_level = get_default_level()

    # Configure root logger to WARNING - silences third-party library noise
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    # Avoid adding duplicate handlers if setup is called multiple times
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)  # Handler accepts all; loggers filter

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)

    # Configure the app namespace logger
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(app_level)


def log_formation_debug(
    logger: logging.Logger,
    bucket_sizes: dict,
    num_duplas: int,
    num_leftovers: int,
    pass_counts: dict | None = None,
) -> None:
    """
    Log dupla formation debug information in a consistent format.

    Args:
        logger: Logger instance to use
        bucket_sizes: Dict of position -> number of players before pairing
        num_duplas: Number of duplas formed
        num_leftovers: Number of unpaired players
        pass_counts: Optional dict of pass name -> duplas formed in that pass
    """
    logger.debug("Bucket sizes: %s", bucket_sizes)
    if pass_counts is not None:
        logger.debug("Duplas per pass: %s", pass_counts)
    logger.debug("Duplas formed: %s", num_duplas)
    logger.debug("Leftover players: %s", num_leftovers)
