"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stackguard.core.config.loader import DEFAULT_CONFIG_PATH, ConfigLoader
from stackguard.core.exceptions.errors import ConfigurationError


class ScannerSettings(BaseSettings):
    """Signal scanner configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="STACKGUARD_SCANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_depth: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum directory depth for the extension walk",
    )
    extra_excluded_dirs: list[str] = Field(
        default_factory=list,
        description="Directory names skipped in addition to the built-in denylist",
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Descend into symlinked directories",
    )


class OutputSettings(BaseSettings):
    """Generated artifact settings."""

    model_config = SettingsConfigDict(
        env_prefix="STACKGUARD_OUTPUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_file: str = Field(
        default=".pre-commit-config.yaml",
        description="Hook pipeline document file name",
    )
    manifest_file: str = Field(
        default="requirements.dev.assist.txt",
        description="Tool manifest file name",
    )
    platform: Literal["auto", "posix", "windows"] = Field(
        default="auto",
        description="Command dialect for native detector hooks",
    )

    @field_validator("config_file", "manifest_file")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """Reject paths; artifacts always land in the project root."""
        if not v or Path(v).name != v:
            raise ValueError(f"Output file must be a plain file name: {v!r}")
        return v


class GenerationSettings(BaseSettings):
    """Configuration generation settings."""

    model_config = SettingsConfigDict(
        env_prefix="STACKGUARD_GENERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_security_level: int = Field(
        default=3,
        ge=1,
        le=3,
        description="Security level used by quick mode",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="STACKGUARD_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="WARNING",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="STACKGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    scanner: ScannerSettings = Field(default_factory=ScannerSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.

        Raises:
            ConfigurationError: If the file is missing, malformed or invalid.
        """
        loader = ConfigLoader(path)
        loader.load()

        try:
            return cls(
                scanner=ScannerSettings(**loader.get_section("scanner")),
                output=OutputSettings(**loader.get_section("output")),
                generation=GenerationSettings(**loader.get_section("generation")),
                logging=LoggingSettings(**loader.get_section("logging")),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings in {path}",
                config_key=str(path),
                details={"errors": e.error_count()},
            ) from e

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from default locations.

        Keys set in config/default.yaml win over environment variables and
        .env; anything the file leaves out falls back to those, then to
        defaults.

        Returns:
            Settings instance.
        """
        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_yaml(DEFAULT_CONFIG_PATH)

        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
