"""Utility functions for configuration and logging."""

from orientation_sorter.utils.config import Config
from orientation_sorter.utils.logger import setup_logger, verbosity_to_level

__all__ = ["Config", "setup_logger", "verbosity_to_level"]
