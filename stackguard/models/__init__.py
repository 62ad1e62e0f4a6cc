"""Data models module."""

from stackguard.models.configuration import Configuration, RenderedArtifacts, ToolManifest
from stackguard.models.signal import GENERIC_TAG, Signal, SignalKind, TagOrigin, TagSet
from stackguard.models.tool_group import (
    LOCAL_SOURCE,
    DetectorKind,
    DetectorSpec,
    SecurityTier,
    ToolGroup,
    ToolSource,
)

__all__ = [
    "GENERIC_TAG",
    "Signal",
    "SignalKind",
    "TagOrigin",
    "TagSet",
    "LOCAL_SOURCE",
    "DetectorKind",
    "DetectorSpec",
    "SecurityTier",
    "ToolGroup",
    "ToolSource",
    "Configuration",
    "ToolManifest",
    "RenderedArtifacts",
]
