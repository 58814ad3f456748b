# MIT License (see LICENSE)
"""
Logging setup for the plastic_sim namespace.

The library itself only creates module loggers. Hosts (demos, benchmarks,
examples) call setup_logging() once to see them.
"""
from __future__ import annotations
import logging
import sys

from .util import log_level_from_env


def setup_logging(level: int | str | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'plastic_sim' logger.

    Args:
        level: Logging level (e.g. logging.DEBUG or "INFO"). Defaults to
               PLASTIC_SIM_LOG_LEVEL, or WARNING when unset.
        log_file: Optional path to also write logs to.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = log_level_from_env()
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {name}")

    logger = logging.getLogger("plastic_sim")
    logger.setLevel(level)

    # Avoid duplicate output when called again.
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

    return logger
