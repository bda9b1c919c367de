"""
Configuration management for sketchlogic.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to tune the codec limits, the envelope key and
logging without changing code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for sketchlogic.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Using default configuration: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "codec": {
                "max_depth": 128,
                "renumber_on_save": False
            },
            "envelope": {
                "key": "sketchwaresecure"
            },
            "paths": {
                "log_file": "sketchlogic.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "codec.max_depth")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("codec.max_depth")  # Returns 128
            config.get("envelope.key")     # Returns "sketchwaresecure"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def max_depth(self) -> int:
        """Get the maximum substack/argument nesting depth accepted by the codec."""
        return int(self.get("codec.max_depth", 128))

    @property
    def renumber_on_save(self) -> bool:
        """Whether block ids are renumbered sequentially when encoding."""
        return bool(self.get("codec.renumber_on_save", False))

    @property
    def envelope_key(self) -> bytes:
        """Get the envelope key (also used as the IV)."""
        return str(self.get("envelope.key", "sketchwaresecure")).encode("utf-8")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "sketchlogic.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
