"""Logging configuration for image-orientation-sorter."""

import logging
import sys
from pathlib import Path
from typing import Optional

QUIET_LEVEL = logging.CRITICAL + 10


def verbosity_to_level(verbose: int = 0, quiet: bool = False) -> int:
    """
    Map the stacked -v count and --quiet to a logging level.

    Args:
        verbose: Number of -v flags
        quiet: Suppress all output

    Returns:
        Logging level (WARNING by default, INFO for -v, DEBUG for -vv and up)
    """
    if quiet:
        return QUIET_LEVEL
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logger(
    name: str = "orientation_sorter",
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        level: Console logging level (default: WARNING)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if log_file else level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt="%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # More verbose in file
        file_format = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger
