"""Tests for the exception hierarchy."""

import pytest

from stackguard.core.exceptions import (
    ConfigurationError,
    ManifestError,
    OutputWriteError,
    StackGuardError,
)


class TestStackGuardError:
    """Tests for the base error."""

    def test_message_only(self):
        """Test an error without details."""
        error = StackGuardError("boom")
        assert str(error) == "boom"
        assert error.details == {}

    def test_with_details(self):
        """Test details are appended."""
        error = StackGuardError("boom", {"key": "value"})
        assert str(error) == "boom - Details: {'key': 'value'}"


class TestSubclasses:
    """Tests for specific errors."""

    @pytest.mark.parametrize(
        "error,key,value",
        [
            (ManifestError("bad", manifest_path="package.json"), "manifest_path", "package.json"),
            (ConfigurationError("bad", config_key="security_level"), "config_key", "security_level"),
            (OutputWriteError("bad", output_path="/tmp/x"), "output_path", "/tmp/x"),
        ],
    )
    def test_context_in_details(self, error: StackGuardError, key: str, value: str):
        """Test the context argument is stored in details."""
        assert isinstance(error, StackGuardError)
        assert error.details[key] == value

    def test_extra_details_are_kept(self):
        """Test caller details merge with context."""
        error = ConfigurationError("bad", config_key="level", details={"allowed": [1, 2, 3]})
        assert error.details == {"allowed": [1, 2, 3], "config_key": "level"}
