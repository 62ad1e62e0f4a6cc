"""L1 Detection Layer - signal scanning and technology classification."""

from stackguard.layers.l1_detection.classifier import TechnologyClassifier, classify
from stackguard.layers.l1_detection.rules import (
    DEPENDENCY_MANIFESTS,
    DEPENDENCY_RULES,
    EXCLUDED_DIRECTORIES,
    EXTENSION_RULES,
    MARKER_RULES,
    SOURCE_ROOTS,
    TAG_LABELS,
    DependencyRule,
    ExtensionRule,
    MarkerRule,
    marker_paths,
    tag_label,
)
from stackguard.layers.l1_detection.scanner import SignalScanner, read_package_dependencies

__all__ = [
    "SignalScanner",
    "read_package_dependencies",
    "TechnologyClassifier",
    "classify",
    "MarkerRule",
    "ExtensionRule",
    "DependencyRule",
    "MARKER_RULES",
    "EXTENSION_RULES",
    "DEPENDENCY_RULES",
    "DEPENDENCY_MANIFESTS",
    "EXCLUDED_DIRECTORIES",
    "SOURCE_ROOTS",
    "TAG_LABELS",
    "marker_paths",
    "tag_label",
]
