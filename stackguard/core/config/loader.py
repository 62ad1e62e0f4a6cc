"""Configuration loader for YAML files."""

from pathlib import Path
from typing import Any

import yaml

from stackguard.core.exceptions.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "default.yaml"


class ConfigLoader:
    """Load a YAML settings file and hand out its sections."""

    def __init__(self, config_path: Path) -> None:
        """Initialize the config loader.

        Args:
            config_path: Path to configuration file.
        """
        self.config_path = config_path
        self._config: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        """Load configuration from the YAML file.

        An empty file is an empty configuration.

        Returns:
            Loaded configuration dictionary.

        Raises:
            ConfigurationError: If the file is missing, unreadable, or not a YAML mapping.
        """
        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Configuration file not found: {self.config_path}",
                config_key=str(self.config_path),
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {self.config_path}",
                config_key=str(self.config_path),
                details={"error": str(e)},
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {self.config_path}",
                config_key=str(self.config_path),
                details={"error": str(e)},
            ) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {self.config_path}",
                config_key=str(self.config_path),
            )

        self._config = loaded
        return self._config

    def get_section(self, section: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Args:
            section: Section name.

        Returns:
            Configuration section dictionary, empty when absent or not a mapping.
        """
        result = self._config.get(section, {})
        return result if isinstance(result, dict) else {}
