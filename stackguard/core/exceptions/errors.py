"""Custom exception definitions for StackGuard."""

from typing import Any


class StackGuardError(Exception):
    """Base exception for all StackGuard errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ManifestError(StackGuardError):
    """Exception raised when a dependency manifest cannot be parsed."""

    def __init__(
        self,
        message: str,
        manifest_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize manifest error.

        Args:
            message: Error message.
            manifest_path: Path of the manifest that failed to parse.
            details: Additional error details.
        """
        details = details or {}
        if manifest_path:
            details["manifest_path"] = manifest_path
        super().__init__(message, details)


class ConfigurationError(StackGuardError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)


class OutputWriteError(StackGuardError):
    """Exception raised when a generated artifact cannot be written."""

    def __init__(
        self,
        message: str,
        output_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize output write error.

        Args:
            message: Error message.
            output_path: Path that could not be written.
            details: Additional error details.
        """
        details = details or {}
        if output_path:
            details["output_path"] = output_path
        super().__init__(message, details)
