"""Exception definitions module."""

from stackguard.core.exceptions.errors import (
    ConfigurationError,
    ManifestError,
    OutputWriteError,
    StackGuardError,
)

__all__ = ["StackGuardError", "ManifestError", "ConfigurationError", "OutputWriteError"]
