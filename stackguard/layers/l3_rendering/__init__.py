"""L3 Rendering Layer - platform command dialects, document rendering and writing."""

from stackguard.layers.l3_rendering.dialects import (
    CommandDialect,
    Platform,
    PosixDialect,
    PowerShellDialect,
    detect_platform,
    get_dialect,
    os_display_name,
    render_detector,
    resolve_platform,
)
from stackguard.layers.l3_rendering.renderer import ConfigRenderer
from stackguard.layers.l3_rendering.writer import write_artifacts, write_file

__all__ = [
    "Platform",
    "CommandDialect",
    "PosixDialect",
    "PowerShellDialect",
    "detect_platform",
    "resolve_platform",
    "os_display_name",
    "get_dialect",
    "render_detector",
    "ConfigRenderer",
    "write_artifacts",
    "write_file",
]
