"""Configuration management for StackGuard."""

from stackguard.core.config.loader import DEFAULT_CONFIG_PATH, ConfigLoader
from stackguard.core.config.settings import (
    GenerationSettings,
    LoggingSettings,
    OutputSettings,
    ScannerSettings,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigLoader",
    "GenerationSettings",
    "LoggingSettings",
    "OutputSettings",
    "ScannerSettings",
    "Settings",
    "get_settings",
]
