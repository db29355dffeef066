# MIT License (see LICENSE)
"""
Logging setup for the particle_sim namespace.

Library modules only create loggers (logging.getLogger(__name__)); they
never configure handlers. Applications and demos call setup_logging()
once at startup.
"""
from __future__ import annotations
import logging
import sys

from .util import env_log_level

LOGGER_NAME = "particle_sim"


def setup_logging(level: int | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'particle_sim' logger.

    Args:
        level: Logging level (e.g. logging.DEBUG). Defaults to the
            PARTICLE_SIM_LOG_LEVEL environment variable, else INFO.
        log_file: Optional path to also write logs to.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = env_log_level()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup (e.g. in a notebook) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
    return logger
