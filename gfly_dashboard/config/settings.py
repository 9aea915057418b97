"""
Settings for GFly Dashboard.
These are configurable parameters that can be changed by the user.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any

from .constants import DEFAULT_BASE_URL, DEFAULT_POLL_INTERVAL_MS, DEFAULT_COMMAND_TIMEOUT

logger = logging.getLogger("gfly_dashboard.settings")


class Settings:
    """
    Application settings that can be loaded from and saved to a configuration file.
    Uses a singleton pattern to ensure only one settings instance exists.

    The file is read once at start-up and only written by an explicit
    save_settings() call.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Settings, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._settings = self._defaults()

        self.config_dir = self._get_config_dir()
        self.config_file = self.config_dir / "settings.json"
        self.load_settings()

        self._initialized = True

    @staticmethod
    def _defaults() -> Dict[str, Any]:
        return {
            # Network settings
            "base_url": DEFAULT_BASE_URL,
            "poll_interval_ms": DEFAULT_POLL_INTERVAL_MS,
            "fetch_timeout": None,  # seconds, None waits for the device indefinitely
            "command_timeout": DEFAULT_COMMAND_TIMEOUT,

            # Display settings
            "default_page": "current",
            "confirm_power_commands": True,
            "log_level": "INFO",
        }

    @staticmethod
    def _get_config_dir() -> Path:
        """Get the configuration directory for the application"""
        if os.name == 'nt':  # Windows
            return Path(os.environ.get('APPDATA', '')) / 'GFlyDashboard'
        return Path(os.path.expanduser("~")) / '.config' / 'gfly-dashboard'

    def load_settings(self) -> bool:
        """Overlay settings from the configuration file, if there is one"""
        try:
            if not self.config_file.exists():
                logger.info("No settings file found, using defaults")
                return False
            with open(self.config_file, 'r') as f:
                loaded_settings = json.load(f)
            if not isinstance(loaded_settings, dict):
                logger.error(f"Ignoring settings file {self.config_file}: not a JSON object")
                return False
            self._settings.update(loaded_settings)
            logger.info(f"Settings loaded from {self.config_file}")
            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error loading settings: {e}")
            return False

    def save_settings(self) -> bool:
        """Save current settings to the configuration file"""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w') as f:
                json.dump(self._settings, f, indent=4)
            logger.info(f"Settings saved to {self.config_file}")
            return True
        except (OSError, TypeError) as e:
            logger.error(f"Error saving settings: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value by key"""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value by key"""
        self._settings[key] = value

    def update(self, values: Dict[str, Any]) -> None:
        """Set several values at once, skipping the ones that are None"""
        for key, value in values.items():
            if value is not None:
                self._settings[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all settings as a dictionary"""
        return self._settings.copy()

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values (in memory only)"""
        self._settings = self._defaults()
        logger.info("Settings reset to defaults")


# Create a global settings instance
settings = Settings()
