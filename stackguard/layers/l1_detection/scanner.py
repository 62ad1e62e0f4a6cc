"""Signal scanner: collects raw presence signals from a project tree."""

import json
import os
from collections.abc import Sequence
from pathlib import Path

from stackguard.core.config.settings import ScannerSettings, get_settings
from stackguard.core.exceptions.errors import ManifestError
from stackguard.core.logger.logger import get_logger
from stackguard.layers.l1_detection.rules import (
    DEPENDENCY_MANIFESTS,
    EXCLUDED_DIRECTORIES,
    SOURCE_ROOTS,
    marker_paths,
)
from stackguard.models.signal import Signal, SignalKind

_GLOB_CHARS = frozenset("*?[")


def read_package_dependencies(manifest_path: Path) -> list[str]:
    """Read dependency names from a package.json style manifest.

    Args:
        manifest_path: Path to the JSON manifest.

    Returns:
        Names from ``dependencies`` followed by ``devDependencies``.

    Raises:
        ManifestError: If the file cannot be read or is not a valid manifest.
    """
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestError(
            f"Cannot parse manifest: {e}",
            manifest_path=str(manifest_path),
        ) from e

    if not isinstance(data, dict):
        raise ManifestError("Manifest root is not an object", manifest_path=str(manifest_path))

    names: list[str] = []
    for section in ("dependencies", "devDependencies"):
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            raise ManifestError(
                f"'{section}' is not an object",
                manifest_path=str(manifest_path),
            )
        names.extend(str(name) for name in deps)
    return names


class SignalScanner:
    """Walks a project directory and reports what it finds.

    Three passes run in order:
    1. Marker checks: direct existence tests for every marker path in the rule table
    2. Extension walk: depth-first, bounded by ``max_depth``, skipping the denylist;
       source roots such as ``src`` are then walked to their full depth
    3. Dependency manifests: JSON package manifests at fixed locations

    Unreadable entries and malformed manifests are skipped, never raised.
    """

    def __init__(
        self,
        settings: ScannerSettings | None = None,
        markers: Sequence[str] | None = None,
        manifests: Sequence[str] = DEPENDENCY_MANIFESTS,
        source_roots: Sequence[str] = SOURCE_ROOTS,
    ) -> None:
        """Initialize the scanner.

        Args:
            settings: Scanner settings. Uses global settings if not provided.
            markers: Marker paths to test. Defaults to those in the rule table.
            manifests: Project-relative JSON manifests to read.
            source_roots: Project-relative directories walked without the depth bound.
        """
        self.logger = get_logger(__name__)
        self.settings = settings or get_settings().scanner
        self.markers = tuple(markers) if markers is not None else marker_paths()
        self.manifests = tuple(manifests)
        self.source_roots = tuple(source_roots)
        self.excluded = frozenset(EXCLUDED_DIRECTORIES) | frozenset(self.settings.extra_excluded_dirs)

    def scan(self, root: Path) -> tuple[Signal, ...]:
        """Collect every signal under a project root.

        Args:
            root: Project root directory.

        Returns:
            Deduplicated signals in a stable order.
        """
        root = Path(root)
        if not root.is_dir():
            self.logger.warning(f"Not a directory, nothing to scan: {root}")
            return ()

        self.logger.info(f"Scanning {root}")

        found: set[Signal] = set()
        found.update(self._marker_signals(root))
        self._walk(root, root, 0, found)
        for source_root in self._source_roots(root):
            self._walk(root, source_root, 0, found, visited=set())
        found.update(self._dependency_signals(root))

        signals = tuple(sorted(found, key=Signal.sort_key))
        self.logger.info(f"Collected {len(signals)} signals")
        return signals

    def _marker_signals(self, root: Path) -> list[Signal]:
        signals: list[Signal] = []
        for marker in self.markers:
            if _GLOB_CHARS.intersection(marker):
                try:
                    matches = sorted(root.glob(marker))
                except OSError as e:
                    self.logger.debug(f"Skipping marker {marker}: {e}")
                    continue
                for match in matches:
                    signal = self._marker_signal(root, match)
                    if signal:
                        signals.append(signal)
            else:
                signal = self._marker_signal(root, root / marker)
                if signal:
                    signals.append(signal)
        return signals

    def _marker_signal(self, root: Path, path: Path) -> Signal | None:
        try:
            if path.is_file():
                kind = SignalKind.FILE
            elif path.is_dir():
                kind = SignalKind.DIRECTORY
            else:
                return None
        except OSError as e:
            self.logger.debug(f"Skipping {path}: {e}")
            return None
        relative = path.relative_to(root).as_posix()
        return Signal(kind=kind, value=relative, source_path=relative)

    def _source_roots(self, root: Path) -> list[Path]:
        roots: list[Path] = []
        for source_root in self.source_roots:
            if self.excluded.intersection(source_root.split("/")):
                continue
            path = root / source_root
            try:
                if not path.is_dir():
                    continue
                if path.is_symlink() and not self.settings.follow_symlinks:
                    continue
            except OSError as e:
                self.logger.debug(f"Skipping source root {path}: {e}")
                continue
            roots.append(path)
        return roots

    def _walk(
        self,
        root: Path,
        directory: Path,
        depth: int,
        found: set[Signal],
        visited: set[str] | None = None,
    ) -> None:
        """Record extension signals below a directory.

        Without ``visited`` the walk stops at ``max_depth``. With it the walk
        is unbounded and ``visited`` holds the real paths already entered.
        """
        if visited is None:
            if depth >= self.settings.max_depth:
                return
        else:
            real = os.path.realpath(directory)
            if real in visited:
                return
            visited.add(real)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self.logger.debug(f"Cannot read directory {directory}: {e}")
            return

        relative_dir = directory.relative_to(root).as_posix()

        for entry in entries:
            try:
                if entry.is_dir():
                    if entry.name in self.excluded:
                        continue
                    if entry.is_symlink() and not self.settings.follow_symlinks:
                        continue
                    self._walk(root, Path(entry.path), depth + 1, found, visited)
                elif entry.is_file():
                    extension = os.path.splitext(entry.name)[1].lower()
                    if extension:
                        found.add(
                            Signal(
                                kind=SignalKind.EXTENSION,
                                value=extension,
                                source_path=relative_dir,
                            )
                        )
            except OSError as e:
                self.logger.debug(f"Skipping {entry.path}: {e}")

    def _dependency_signals(self, root: Path) -> list[Signal]:
        signals: list[Signal] = []
        for manifest in self.manifests:
            path = root / manifest
            if not path.is_file():
                continue
            try:
                names = read_package_dependencies(path)
            except ManifestError as e:
                self.logger.debug(f"Ignoring manifest: {e}")
                continue
            signals.extend(
                Signal(kind=SignalKind.DEPENDENCY, value=name, source_path=manifest)
                for name in names
            )
        return signals
