"""Technology classifier: maps raw signals to technology tags."""

from collections.abc import Iterable

from stackguard.core.logger.logger import get_logger
from stackguard.layers.l1_detection.rules import (
    DEPENDENCY_RULES,
    EXTENSION_RULES,
    MARKER_RULES,
    DependencyRule,
    ExtensionRule,
    MarkerRule,
)
from stackguard.models.signal import GENERIC_TAG, Signal, SignalKind, TagOrigin, TagSet


class TechnologyClassifier:
    """Pure table-driven classifier.

    Ecosystem markers (files, directories, extensions) and framework
    dependencies are classified in separate passes, since tool selection may
    depend on either. Rules only ever add tags.
    """

    def __init__(
        self,
        marker_rules: Iterable[MarkerRule] = MARKER_RULES,
        extension_rules: Iterable[ExtensionRule] = EXTENSION_RULES,
        dependency_rules: Iterable[DependencyRule] = DEPENDENCY_RULES,
    ) -> None:
        """Initialize the classifier.

        Args:
            marker_rules: File and directory rules.
            extension_rules: File extension rules.
            dependency_rules: Package dependency rules.
        """
        self.logger = get_logger(__name__)
        self.marker_rules = tuple(marker_rules)
        self.extension_rules = tuple(extension_rules)
        self.dependency_rules = tuple(dependency_rules)

    def classify(self, signals: Iterable[Signal]) -> TagSet:
        """Classify signals into a tag set.

        Args:
            signals: Signals from the scanner, or built directly in tests.

        Returns:
            Tag set; ``{generic}`` when nothing was recognized.
        """
        signals = tuple(signals)
        origins: dict[str, TagOrigin] = {}

        for tag, origin in self.ecosystem_tags(signals):
            origins.setdefault(tag, origin)
        for tag in self.dependency_tags(signals):
            origins.setdefault(tag, TagOrigin.DEPENDENCY)

        if not origins:
            self.logger.info("Generic project detected - applying universal security rules")
            origins[GENERIC_TAG] = TagOrigin.FALLBACK

        tags = TagSet(tags=frozenset(origins), origins=origins)
        self.logger.info(f"Detected {len(tags)} technology stack(s): {', '.join(tags.sorted())}")
        return tags

    def ecosystem_tags(self, signals: tuple[Signal, ...]) -> list[tuple[str, TagOrigin]]:
        """Tags from marker files, directories and extensions."""
        found: list[tuple[str, TagOrigin]] = []

        for rule in self.marker_rules:
            for signal in signals:
                if rule.matches(signal):
                    origin = TagOrigin.DIRECTORY if signal.kind == SignalKind.DIRECTORY else TagOrigin.FILE
                    found.append((rule.tag, origin))
                    break

        for rule in self.extension_rules:
            if rule.evaluate(signals):
                found.append((rule.tag, TagOrigin.EXTENSION))

        return found

    def dependency_tags(self, signals: tuple[Signal, ...]) -> list[str]:
        """Tags from declared package dependencies."""
        found: list[str] = []
        for rule in self.dependency_rules:
            for signal in signals:
                if rule.matches(signal):
                    self.logger.debug(f"{rule.label} (from {signal.source_path})")
                    found.append(rule.tag)
                    break
        return found


def classify(signals: Iterable[Signal]) -> TagSet:
    """Classify signals with the built-in rule tables."""
    return TechnologyClassifier().classify(signals)
