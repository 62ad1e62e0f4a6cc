"""Artifact writer: replaces the generated documents in the project root.

Every document is first written to a temporary sibling. Only when all of
them are staged are they moved into place, so a failed run leaves the
existing documents as they were.
"""

import os
import tempfile
from pathlib import Path

from stackguard.core.exceptions.errors import OutputWriteError
from stackguard.core.logger.logger import get_logger
from stackguard.models.configuration import RenderedArtifacts

logger = get_logger(__name__)


def _stage(path: Path, content: str) -> Path:
    """Write content to a temporary file next to ``path``."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return Path(tmp_name)


def _read_previous(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def _restore(path: Path, previous: bytes | None) -> None:
    """Put back what a replaced document held before the run."""
    try:
        if previous is None:
            path.unlink(missing_ok=True)
        else:
            tmp = _stage(path, "")
            tmp.write_bytes(previous)
            os.replace(tmp, path)
    except OSError as e:
        logger.error(f"Could not restore {path.name}: {e}")


def write_file(path: Path, content: str) -> None:
    """Write a file through a temporary sibling so readers never see a partial file.

    Args:
        path: Destination path.
        content: Full file content.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    tmp: Path | None = None
    try:
        tmp = _stage(path, content)
        os.replace(tmp, path)
        tmp = None
    except OSError as e:
        raise OutputWriteError(f"Cannot write {path.name}: {e}", output_path=str(path)) from e
    finally:
        if tmp is not None:
            tmp.unlink(missing_ok=True)


def write_artifacts(artifacts: RenderedArtifacts, root: Path) -> list[Path]:
    """Write both documents into a project root, overwriting existing files.

    Either every document is replaced or none is.

    Args:
        artifacts: Rendered documents.
        root: Project root directory.

    Returns:
        Paths written, in order.

    Raises:
        OutputWriteError: If the root is missing or a file cannot be written.
    """
    root = Path(root)
    if not root.is_dir():
        raise OutputWriteError("Output directory does not exist", output_path=str(root))

    staged: list[tuple[Path, Path]] = []
    replaced: list[tuple[Path, bytes | None]] = []
    path = root
    try:
        for name, content in artifacts.files():
            path = root / name
            staged.append((path, _stage(path, content)))

        for path, tmp in staged:
            previous = _read_previous(path)
            os.replace(tmp, path)
            replaced.append((path, previous))
    except OSError as e:
        for done_path, previous in reversed(replaced):
            _restore(done_path, previous)
        raise OutputWriteError(f"Cannot write {path.name}: {e}", output_path=str(path)) from e
    finally:
        for _, tmp in staged:
            tmp.unlink(missing_ok=True)

    written = [path for path, _ in staged]
    for path in written:
        logger.info(f"Generated {path.name}")
    return written
