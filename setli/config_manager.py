"""
Configuration management for setli.

Configuration lives for the process lifetime only: built-in defaults,
overridden by SETLI_<KEY> environment variables, overridden by set() calls.
CONFIG_SCHEMA describes each key for read-only display; values are set
through the environment or the command line.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "SETLI_"

CONFIG_GROUPS = {
    "renderer": {"label": "Renderer Connection", "order": 1},
    "display": {"label": "Text Display", "order": 2},
    "server": {"label": "Web Server", "order": 3},
}

CONFIG_SCHEMA = {
    "obs_host": {
        "group": "renderer",
        "label": "Host",
        "description": "Host running the broadcast tool's websocket server.",
    },
    "obs_port": {
        "group": "renderer",
        "label": "Port",
        "description": "Websocket server port (4455 by default).",
    },
    "obs_password": {
        "group": "renderer",
        "label": "Password",
        "description": "Websocket server password. Shown masked.",
    },
    "auto_connect": {
        "group": "renderer",
        "label": "Connect On Startup",
        "description": "Connect with the values above when setli starts.",
    },
    "font_size": {
        "group": "display",
        "label": "Font Size",
        "description": "Size written into the text element's font when style settings are applied.",
    },
    "log_level": {
        "group": "server",
        "label": "Log Level",
        "description": "Verbosity of the server log (DEBUG, INFO, WARNING or ERROR).",
    },
}


class ConfigManager:
    """Manages in-memory configuration."""

    DEFAULTS = {
        "web_host": "127.0.0.1",
        "web_port": "8000",
        "obs_host": "localhost",
        "obs_port": "4455",
        "obs_password": "",
        "auto_connect": "false",
        "font_size": "300",  # Fixed size of the font descriptor
        "log_level": "INFO",
    }

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize ConfigManager.

        Args:
            environ: Environment to read SETLI_* overrides from (defaults to os.environ)
        """
        self.logger = logging.getLogger(__name__)
        self._values: Dict[str, str] = dict(self.DEFAULTS)

        env = os.environ if environ is None else environ
        for key in self.DEFAULTS:
            env_key = ENV_PREFIX + key.upper()
            if env_key in env:
                self._values[key] = env[env_key]
                self.logger.debug("Using %s from environment", env_key)

    def get(self, key: str, default: Any = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            key: Configuration key
            default: Returned when the key is unset or empty

        Returns:
            Configuration value as string, or default
        """
        value = self._values.get(key)
        if value is None or value == "":
            return default
        return value

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Get configuration value as integer."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            self.logger.warning("Invalid integer value for %s: %s", key, value)
            return default

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        """Get configuration value as boolean."""
        value = self.get(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def set(self, key: str, value: Any) -> bool:
        """
        Set a configuration value (converted to string).

        Returns:
            True
        """
        self._values[key] = "" if value is None else str(value)
        return True

    def get_all(self) -> dict:
        """Get all configuration values, with the password masked."""
        values = dict(self._values)
        if values.get("obs_password"):
            values["obs_password"] = "********"
        return values

    def get_full_config(self) -> dict:
        """
        Get complete configuration data for the UI.

        Returns:
            Dictionary with 'values', 'schema', and 'groups' keys.
        """
        return {
            "values": self.get_all(),
            "schema": {key: dict(key_def) for key, key_def in CONFIG_SCHEMA.items()},
            "groups": CONFIG_GROUPS.copy(),
        }
