"""Pytest configuration and shared fixtures."""

import json
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest

from stackguard.core.config.settings import OutputSettings, ScannerSettings, Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_project(temp_dir: Path) -> Callable[[dict[str, str | dict]], Path]:
    """Build a project tree from a mapping of relative paths to contents.

    Dict values are written as JSON, strings as text.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Function that writes the files and returns the project root.
    """

    def _make(files: dict[str, str | dict]) -> Path:
        for relative, content in files.items():
            path = temp_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                path.write_text(json.dumps(content), encoding="utf-8")
            else:
                path.write_text(content, encoding="utf-8")
        return temp_dir

    return _make


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults and POSIX output, independent of the host.

    Returns:
        Settings instance.
    """
    return Settings(
        scanner=ScannerSettings(max_depth=3, extra_excluded_dirs=[], follow_symlinks=False),
        output=OutputSettings(platform="posix"),
    )
