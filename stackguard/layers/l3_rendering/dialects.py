"""
Command dialects - render native detector specs as shell commands.

A DetectorSpec says what to look for; each dialect knows how to express
that search on one platform. Both dialects exclude the same directories,
print the same banner lines around findings and exit 1 when something is
found, so a hook behaves the same wherever the pipeline runs.
"""

import re
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum

from stackguard.core.exceptions.errors import ConfigurationError
from stackguard.layers.l1_detection.rules import EXCLUDED_DIRECTORIES
from stackguard.models.tool_group import DetectorKind, DetectorSpec


class Platform(str, Enum):
    """Target platform for native hook commands."""

    POSIX = "posix"
    WINDOWS = "windows"


def detect_platform() -> Platform:
    """Return the platform of the running interpreter."""
    return Platform.WINDOWS if sys.platform.startswith("win") else Platform.POSIX


def resolve_platform(name: str | Platform) -> Platform:
    """Resolve a platform setting, where ``auto`` means the running platform.

    Raises:
        ConfigurationError: If the name is not auto, posix or windows.
    """
    if isinstance(name, Platform):
        return name
    if name == "auto":
        return detect_platform()
    try:
        return Platform(name)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown platform: {name}",
            config_key="output.platform",
            details={"allowed": ["auto"] + [p.value for p in Platform]},
        ) from e


def os_display_name() -> str:
    """Human name of the running operating system."""
    if sys.platform.startswith("win"):
        return "Windows"
    if sys.platform == "darwin":
        return "macOS"
    return "Linux"


def _banner_open(banner: str) -> str:
    return f"=== {banner} DETECTED ==="


def _banner_close(banner: str) -> str:
    return f"=== END {banner} ==="


def _utf16_ranges(start: int, end: int) -> list[str]:
    """Express a code point range as UTF-16 regex alternatives.

    Astral code points are split per high surrogate so each alternative is
    one high surrogate followed by a class of low surrogates.
    """
    parts: list[str] = []
    cp = start
    while cp <= end:
        if cp < 0x10000:
            block_end = min(end, 0xFFFF)
            parts.append(f"[\\u{cp:04X}-\\u{block_end:04X}]")
            cp = block_end + 1
            continue
        offset = cp - 0x10000
        block_end = min(end, 0x10000 + ((offset >> 10) + 1) * 0x400 - 1)
        high = 0xD800 + (offset >> 10)
        low_start = 0xDC00 + (offset & 0x3FF)
        low_end = 0xDC00 + ((block_end - 0x10000) & 0x3FF)
        parts.append(f"\\u{high:04X}[\\u{low_start:04X}-\\u{low_end:04X}]")
        cp = block_end + 1
    return parts


class CommandDialect(ABC):
    """
    Abstract base class for platform command dialects.

    Subclasses render each detector kind; ``render`` dispatches on the kind.
    """

    platform: Platform

    def __init__(
        self,
        excluded_dirs: Sequence[str] = EXCLUDED_DIRECTORIES,
        excluded_files: Sequence[str] = (),
    ) -> None:
        """
        Initialize the dialect.

        Args:
            excluded_dirs: Directory names never searched.
            excluded_files: File names never searched, such as generated artifacts.
        """
        self.excluded_dirs = tuple(excluded_dirs)
        self.excluded_files = tuple(excluded_files)

    def render(self, spec: DetectorSpec) -> str:
        """Render a detector as a single command line."""
        if spec.kind == DetectorKind.CONTENT:
            return self.content_search(spec)
        if spec.kind == DetectorKind.FILE_NAME:
            return self.file_name_search(spec)
        return self.package_audit(spec)

    @abstractmethod
    def content_search(self, spec: DetectorSpec) -> str:
        """Search file contents for a pattern."""

    @abstractmethod
    def file_name_search(self, spec: DetectorSpec) -> str:
        """Report files whose names match the include globs."""

    @abstractmethod
    def package_audit(self, spec: DetectorSpec) -> str:
        """Run each audit command whose manifest exists."""


class PosixDialect(CommandDialect):
    """bash, grep and find."""

    platform = Platform.POSIX

    @staticmethod
    def _wrap(script: str) -> str:
        return f'bash -c "{script}"'

    @staticmethod
    def _report(banner: str, success_message: str) -> str:
        return (
            'if [ -n \\"$found\\" ]; then '
            f"echo '{_banner_open(banner)}'; "
            'echo \\"$found\\"; '
            f"echo '{_banner_close(banner)}'; "
            "exit 1; fi; "
            f"echo '{success_message}'"
        )

    def pattern_for(self, spec: DetectorSpec) -> str:
        """PCRE class for code point ranges, else the extended regex as is."""
        if spec.codepoint_ranges:
            ranges = "".join(f"\\x{{{start:X}}}-\\x{{{end:X}}}" for start, end in spec.codepoint_ranges)
            return f"[{ranges}]"
        return spec.pattern or ""

    def content_search(self, spec: DetectorSpec) -> str:
        flags = "-rnI"
        if spec.case_insensitive:
            flags += "i"
        flags += "P" if spec.codepoint_ranges else "E"

        parts = ["grep", flags]
        parts.extend(f"--exclude-dir={name}" for name in self.excluded_dirs)
        parts.extend(f"--exclude='{glob}'" for glob in (*self.excluded_files, *spec.exclude_globs))
        parts.extend(f"--include='{glob}'" for glob in spec.include_globs)
        parts.append(f"'{self.pattern_for(spec)}'")
        parts.append(".")

        command = " ".join(parts)
        if spec.codepoint_ranges:
            command = f"LC_ALL=C.UTF-8 {command}"
        return self._wrap(f"found=$({command}); {self._report(spec.banner, spec.success_message)}")

    def file_name_search(self, spec: DetectorSpec) -> str:
        pruned = " -o ".join(f"-name '{name}'" for name in self.excluded_dirs)
        wanted = " -o ".join(f"-name '{glob}'" for glob in spec.include_globs)
        command = f"find . -type d \\( {pruned} \\) -prune -o -type f \\( {wanted} \\) -print"
        return self._wrap(f"found=$({command}); {self._report(spec.banner, spec.success_message)}")

    def package_audit(self, spec: DetectorSpec) -> str:
        steps = [f"if [ -f {manifest} ]; then {command}; fi" for manifest, command in spec.audits]
        steps.append(f"echo '{spec.success_message}'")
        return self._wrap(" && ".join(steps))


class PowerShellDialect(CommandDialect):
    """Windows PowerShell, Get-ChildItem and Select-String."""

    platform = Platform.WINDOWS

    @staticmethod
    def _wrap(script: str) -> str:
        return f'powershell -NoProfile -Command "{script}"'

    def _excluded_dir_regex(self) -> str:
        names = "|".join(re.escape(name) for name in self.excluded_dirs)
        return f"(^|[/\\x5C])({names})[/\\x5C]"

    def _list_files(self, include_globs: Sequence[str], exclude_globs: Sequence[str]) -> str:
        command = "Get-ChildItem -Path . -Recurse -File -Force"
        if include_globs:
            command += " -Include " + ",".join(f"'{glob}'" for glob in include_globs)
        command += " -ErrorAction SilentlyContinue"

        relative = "(Resolve-Path -LiteralPath $_.FullName -Relative)"
        conditions = [f"{relative} -notmatch '{self._excluded_dir_regex()}'"]
        conditions.extend(f"$_.Name -notlike '{glob}'" for glob in exclude_globs)
        return f"{command} | Where-Object {{ {' -and '.join(conditions)} }}"

    @staticmethod
    def _report(banner: str, success_message: str, line_expression: str) -> str:
        return (
            "if ($found) { "
            f"Write-Host '{_banner_open(banner)}'; "
            f"$found | ForEach-Object {{ Write-Host {line_expression} }}; "
            f"Write-Host '{_banner_close(banner)}'; "
            "exit 1 }; "
            f"Write-Host '{success_message}'"
        )

    def pattern_for(self, spec: DetectorSpec) -> str:
        """.NET regex for code point ranges as surrogate pairs, else the pattern as is."""
        if spec.codepoint_ranges:
            alternatives: list[str] = []
            for start, end in spec.codepoint_ranges:
                alternatives.extend(_utf16_ranges(start, end))
            return "|".join(alternatives)
        return spec.pattern or ""

    def content_search(self, spec: DetectorSpec) -> str:
        files = self._list_files(spec.include_globs, (*self.excluded_files, *spec.exclude_globs))
        search = f"Select-String -LiteralPath $files.FullName -Pattern '{self.pattern_for(spec)}' -Encoding UTF8"
        if not spec.case_insensitive:
            search += " -CaseSensitive"
        line = "('{0}:{1}:{2}' -f (Resolve-Path -LiteralPath $_.Path -Relative), $_.LineNumber, $_.Line.Trim())"
        script = (
            f"$files = @({files}); "
            f"$found = if ($files) {{ {search} }}; "
            f"{self._report(spec.banner, spec.success_message, line)}"
        )
        return self._wrap(script)

    def file_name_search(self, spec: DetectorSpec) -> str:
        files = self._list_files(spec.include_globs, ())
        line = "(Resolve-Path -LiteralPath $_.FullName -Relative)"
        script = f"$found = @({files}); {self._report(spec.banner, spec.success_message, line)}"
        return self._wrap(script)

    def package_audit(self, spec: DetectorSpec) -> str:
        steps = [
            f"if (Test-Path '{manifest}') {{ {command}; if ($LASTEXITCODE -ne 0) {{ exit $LASTEXITCODE }} }}"
            for manifest, command in spec.audits
        ]
        steps.append(f"Write-Host '{spec.success_message}'")
        return self._wrap("; ".join(steps))


DIALECTS: dict[Platform, type[CommandDialect]] = {
    Platform.POSIX: PosixDialect,
    Platform.WINDOWS: PowerShellDialect,
}


def get_dialect(platform: str | Platform, excluded_files: Sequence[str] = ()) -> CommandDialect:
    """Create the dialect for a platform setting.

    Args:
        platform: ``auto``, ``posix`` or ``windows``.
        excluded_files: File names the detectors never search.

    Returns:
        Command dialect instance.
    """
    return DIALECTS[resolve_platform(platform)](excluded_files=excluded_files)


def render_detector(spec: DetectorSpec, platform: str | Platform = "auto") -> str:
    """Render one detector for a platform with the default exclusions."""
    return get_dialect(platform).render(spec)
