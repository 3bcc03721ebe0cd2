"""Configuration management for image-orientation-sorter."""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class Config:
    """Read-only user settings, used as defaults for command-line options."""

    DEFAULT_CONFIG_DIR = Path.home() / ".image-orientation-sorter"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"

    DEFAULT_SETTINGS: Dict[str, Any] = {
        "collision_policy": "rename",  # rename, overwrite, skip
        "read_headers": False,
        "skip_hidden": False,
        "show_progress": True,
    }

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to config file (default: ~/.image-orientation-sorter/config.json)
        """
        self.config_file = config_file or self.DEFAULT_CONFIG_FILE
        self.settings: Dict[str, Any] = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load configuration from file, keeping defaults for missing keys."""
        if not self.config_file.exists():
            logger.debug(f"No config file at {self.config_file}, using defaults")
            return

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Invalid config file: {e}. Using defaults.")
            return

        if not isinstance(loaded, dict):
            logger.warning(f"Invalid config file {self.config_file}: expected an object. Using defaults.")
            return

        self.settings.update(loaded)
        logger.debug(f"Loaded configuration from {self.config_file}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value
