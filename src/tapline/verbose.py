"""Logging configuration for tapline's own debug output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path | None = None,
    verbose: bool = False,
    logger_name: str = "tapline",
    level: int | str = logging.DEBUG,
) -> logging.Logger:
    """
    Configure and return a logger for tapline's debug output.

    TAP lines never go through this logger; it only records what sessions
    do (plans fixed, sessions finalized, subtests collapsed, bail-outs).

    Args:
        debug_file: Path to a debug log file. Created with its parents if given.
        verbose: If True, also log to stderr.
        logger_name: Name of the logger instance.
        level: Threshold for the logger and its handlers.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    # Clear any existing handlers for this specific logger
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    logger.disabled = False
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(debug_file, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # stderr keeps diagnostics out of the TAP stream on stdout
    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
