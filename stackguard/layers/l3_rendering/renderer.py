"""Config renderer: serializes a Configuration into the generated documents."""

from typing import Any

import yaml

from stackguard.core.config.settings import OutputSettings, get_settings
from stackguard.core.logger.logger import get_logger
from stackguard.layers.l2_composition.manifest import build_manifest, render_manifest
from stackguard.layers.l3_rendering.dialects import CommandDialect, Platform, get_dialect
from stackguard.models.configuration import Configuration, RenderedArtifacts
from stackguard.models.tool_group import ToolGroup, ToolSource

SECRETS_BASELINE = ".secrets.baseline"

CONFIG_HEADER = (
    "# Universal Smart Pre-commit Configuration",
    "# Generated for comprehensive enterprise-grade code quality",
    "# Security: Gitleaks, TruffleHog, Bandit, detect-secrets",
    "# AI Detection: Emoji patterns, encoded content, digital signatures",
    "# Vulnerability: Package scanning, suspicious patterns",
    "# Quality: ESLint, Prettier, Black, SQLFluff",
)


class _IndentedDumper(yaml.SafeDumper):
    """Indents block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


class ConfigRenderer:
    """Renders the hook pipeline document and the tool manifest."""

    def __init__(
        self,
        settings: OutputSettings | None = None,
        platform: str | Platform | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            settings: Output settings. Uses global settings if not provided.
            platform: Overrides the platform from settings.
        """
        self.logger = get_logger(__name__)
        self.settings = settings or get_settings().output
        self.dialect: CommandDialect = get_dialect(
            platform or self.settings.platform,
            excluded_files=(self.settings.config_file, self.settings.manifest_file, SECRETS_BASELINE),
        )

    def render(self, configuration: Configuration) -> RenderedArtifacts:
        """Render both documents in memory.

        Args:
            configuration: Composed configuration.

        Returns:
            Rendered documents with their target file names.
        """
        config_text = self.render_config(configuration)
        manifest_text = render_manifest(build_manifest(configuration))
        self.logger.info(
            f"Rendered {len(configuration.groups)} hooks for {self.dialect.platform.value}"
        )
        return RenderedArtifacts(
            config_text=config_text,
            manifest_text=manifest_text,
            config_file=self.settings.config_file,
            manifest_file=self.settings.manifest_file,
        )

    def render_config(self, configuration: Configuration) -> str:
        """Render the hook pipeline document with its comment header."""
        header = [
            *CONFIG_HEADER,
            f"# Security level: {configuration.security_level}",
            f"# Technologies: {', '.join(configuration.tags.sorted())}",
        ]
        body = yaml.dump(
            {"repos": self.repos(configuration)},
            Dumper=_IndentedDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=float("inf"),
        )
        return "\n".join(header) + "\n\n" + body

    def repos(self, configuration: Configuration) -> list[dict[str, Any]]:
        """Group consecutive hooks sharing a source into repo entries."""
        repos: list[dict[str, Any]] = []
        current: ToolSource | None = None
        for group in configuration.groups:
            if current is None or group.source != current:
                current = group.source
                entry: dict[str, Any] = {"repo": current.repo}
                if current.rev:
                    entry["rev"] = current.rev
                entry["hooks"] = []
                repos.append(entry)
            repos[-1]["hooks"].append(self.hook(group))
        return repos

    def hook(self, group: ToolGroup) -> dict[str, Any]:
        """Render one hook with keys in fixed order, omitting unset ones."""
        entry = self.dialect.render(group.detector) if group.is_native else group.entry
        fields: list[tuple[str, Any]] = [
            ("id", group.identifier),
            ("name", group.display_name),
            ("entry", entry),
            ("language", group.language),
            ("files", group.files),
            ("exclude", group.exclude),
            ("args", list(group.args) if group.args else None),
            ("language_version", group.language_version),
            ("pass_filenames", group.pass_filenames),
        ]
        return {key: value for key, value in fields if value is not None}
