"""Pre-commit setup workflow: detect, compose, render and write."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from stackguard.core.config.settings import Settings, get_settings
from stackguard.core.logger.logger import get_logger
from stackguard.layers.l1_detection.classifier import TechnologyClassifier
from stackguard.layers.l1_detection.scanner import SignalScanner
from stackguard.layers.l2_composition.composer import RuleComposer
from stackguard.layers.l3_rendering.renderer import ConfigRenderer
from stackguard.layers.l3_rendering.writer import write_artifacts
from stackguard.models.configuration import Configuration, RenderedArtifacts
from stackguard.models.signal import Signal, SignalKind, TagSet

TeamSize = Literal["small", "medium", "large"]


class SetupConfig(BaseModel):
    """Parameters collected by the CLI for one setup run."""

    security_level: int = Field(default=3, description="Requested security level, 1 to 3")
    advanced: bool = False
    team_size: TeamSize | None = Field(
        default=None,
        description="Reported in the summary only",
    )
    platform: Literal["auto", "posix", "windows"] | None = Field(
        default=None,
        description="Overrides the output platform setting",
    )
    detect_only: bool = False


@dataclass
class SetupResult:
    """Result of a setup run."""

    root: Path
    signals: tuple[Signal, ...] = ()
    tags: TagSet = field(default_factory=TagSet)
    configuration: Configuration | None = None
    artifacts: RenderedArtifacts | None = None
    written: list[Path] = field(default_factory=list)
    team_size: str | None = None

    @property
    def signal_counts(self) -> dict[str, int]:
        """Number of signals of each kind."""
        counts = {kind.value: 0 for kind in SignalKind}
        for signal in self.signals:
            counts[signal.kind.value] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation.
        """
        return {
            "root": str(self.root),
            "tags": self.tags.sorted(),
            "signals": self.signal_counts,
            "security_level": self.configuration.security_level if self.configuration else None,
            "hooks": self.configuration.identifiers if self.configuration else [],
            "applied_rules": list(self.configuration.applied_rules) if self.configuration else [],
            "written": [path.name for path in self.written],
            "team_size": self.team_size,
        }


class PrecommitSetup:
    """Runs the detection and generation pipeline for one project root.

    The pipeline is recomputed on every call:
    1. Scan the tree for signals
    2. Classify signals into technology tags
    3. Compose tool groups for the tags and security level
    4. Render both documents, then write them
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the workflow.

        Args:
            settings: Application settings. Uses global settings if not provided.
        """
        self.logger = get_logger(__name__)
        self.settings = settings or get_settings()
        self.scanner = SignalScanner(settings=self.settings.scanner)
        self.classifier = TechnologyClassifier()
        self.composer = RuleComposer()

    def detect(self, root: Path) -> SetupResult:
        """Scan and classify without generating anything.

        Args:
            root: Project root directory.

        Returns:
            Result holding the signals and tags.
        """
        root = Path(root)
        signals = self.scanner.scan(root)
        tags = self.classifier.classify(signals)
        return SetupResult(root=root, signals=signals, tags=tags)

    def generate(self, root: Path, config: SetupConfig, result: SetupResult | None = None) -> SetupResult:
        """Compose, render and write the documents for a project.

        Args:
            root: Project root directory.
            config: Setup parameters.
            result: Detection result to reuse; detects when not given.

        Returns:
            Result with configuration, artifacts and written paths.

        Raises:
            ConfigurationError: If the security level or platform is invalid.
            OutputWriteError: If a document cannot be written.
        """
        result = result or self.detect(root)
        result.team_size = config.team_size

        configuration = self.composer.compose(result.tags, config.security_level, advanced=config.advanced)
        renderer = ConfigRenderer(settings=self.settings.output, platform=config.platform)
        artifacts = renderer.render(configuration)

        result.configuration = configuration
        result.artifacts = artifacts
        result.written = write_artifacts(artifacts, result.root)

        self.logger.info(f"Setup complete for {result.root}: {len(configuration.groups)} hooks")
        return result

    def run(self, root: Path, config: SetupConfig | None = None) -> SetupResult:
        """Run the full workflow, or detection only when requested.

        Args:
            root: Project root directory.
            config: Setup parameters. Defaults to quick mode.

        Returns:
            Setup result.
        """
        config = config or SetupConfig(security_level=self.settings.generation.default_security_level)
        result = self.detect(root)
        if config.detect_only:
            return result
        return self.generate(root, config, result=result)
