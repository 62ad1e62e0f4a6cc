"""Tests for the CLI entry point."""

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from stackguard import __version__
from stackguard.cli.main import main

OUTPUTS = (".pre-commit-config.yaml", "requirements.dev.assist.txt")


def _write(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


class TestMainGroup:
    """Tests for the top level command."""

    def test_version(self):
        """Test --version prints the version."""
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_quick_mode(self, temp_dir: Path):
        """Test running without a subcommand generates at level 3."""
        _write(temp_dir, {"requirements.txt": "flask\n"})
        result = CliRunner().invoke(main, ["--path", str(temp_dir)])
        assert result.exit_code == 0, result.output
        config = (temp_dir / ".pre-commit-config.yaml").read_text(encoding="utf-8")
        assert "id: emoji-ai-detector" in config
        assert "id: black" in config
        assert "Quick Start Commands" in result.output

    def test_detect_only(self, temp_dir: Path):
        """Test --detect-only never writes."""
        _write(temp_dir, {"requirements.txt": "flask\n"})
        result = CliRunner().invoke(main, ["--detect-only", "--path", str(temp_dir)])
        assert result.exit_code == 0
        assert "python" in result.output
        for name in OUTPUTS:
            assert not (temp_dir / name).exists()

    def test_interactive(self, temp_dir: Path):
        """Test --interactive uses the prompt answers."""
        with (
            patch("stackguard.cli.main.ask_advanced_options", return_value=True),
            patch("stackguard.cli.main.select_team_size", return_value="large"),
            patch("stackguard.cli.main.select_security_level", return_value=1),
        ):
            result = CliRunner().invoke(main, ["--interactive", "--path", str(temp_dir)])

        assert result.exit_code == 0, result.output
        config = (temp_dir / ".pre-commit-config.yaml").read_text(encoding="utf-8")
        assert "id: enterprise-security-scan" in config
        assert "id: detect-private-key" not in config
        assert "large" in result.output

    def test_interactive_cancelled(self, temp_dir: Path):
        """Test a cancelled prompt writes nothing."""
        with (
            patch("stackguard.cli.main.ask_advanced_options", return_value=False),
            patch("stackguard.cli.main.select_team_size", return_value=None),
            patch("stackguard.cli.main.select_security_level") as mock_level,
        ):
            result = CliRunner().invoke(main, ["-i", "-p", str(temp_dir)])

        assert result.exit_code == 0
        mock_level.assert_not_called()
        for name in OUTPUTS:
            assert not (temp_dir / name).exists()

    def test_interactive_interrupted(self, temp_dir: Path):
        """Test Ctrl+C during prompts aborts without writing."""
        with patch("stackguard.cli.main.ask_advanced_options", side_effect=KeyboardInterrupt):
            result = CliRunner().invoke(main, ["-i", "-p", str(temp_dir)])

        assert result.exit_code == 0
        assert "Interrupted" in result.output
        for name in OUTPUTS:
            assert not (temp_dir / name).exists()

    def test_config_file(self, temp_dir: Path):
        """Test --config loads output names from YAML."""
        project = temp_dir / "project"
        project.mkdir()
        config_path = temp_dir / "settings.yaml"
        config_path.write_text("output:\n  config_file: hooks.yaml\n  platform: posix\ngeneration:\n  default_security_level: 1\n")

        result = CliRunner().invoke(main, ["--config", str(config_path), "--path", str(project)])

        assert result.exit_code == 0, result.output
        assert (project / "hooks.yaml").exists()
        assert not (project / ".pre-commit-config.yaml").exists()

    def test_invalid_config_file(self, temp_dir: Path):
        """Test an invalid settings file exits with status 1."""
        config_path = temp_dir / "settings.yaml"
        config_path.write_text("generation:\n  default_security_level: 9\n")

        result = CliRunner().invoke(main, ["--config", str(config_path), "--path", str(temp_dir)])

        assert result.exit_code == 1
        assert "Setup Failed" in result.output


class TestDetectCommand:
    """Tests for the detect subcommand."""

    def test_json(self, temp_dir: Path):
        """Test --json prints tags, origins and signal counts."""
        _write(temp_dir, {"requirements.txt": "flask\n", "db/schema.sql": ""})
        result = CliRunner().invoke(main, ["detect", "--json", "--path", str(temp_dir)])
        assert result.exit_code == 0

        payload = json.loads(result.stdout)
        assert payload["tags"] == ["python", "sql"]
        assert payload["origins"] == {"python": "file", "sql": "extension"}
        assert payload["signals"]["file"] == 1

    def test_table(self, temp_dir: Path):
        """Test the default table output."""
        result = CliRunner().invoke(main, ["detect", "--path", str(temp_dir)])
        assert result.exit_code == 0
        assert "Generic Project" in result.output

    def test_group_path(self, temp_dir: Path):
        """Test the group level --path is used by subcommands."""
        _write(temp_dir, {"Dockerfile": "FROM scratch\n"})
        result = CliRunner().invoke(main, ["--path", str(temp_dir), "detect", "--json"])
        assert json.loads(result.stdout)["tags"] == ["docker"]


class TestGenerateCommand:
    """Tests for the generate subcommand."""

    def test_generate_level(self, temp_dir: Path):
        """Test generate at an explicit level."""
        _write(temp_dir, {"requirements.txt": "flask\n"})
        result = CliRunner().invoke(main, ["generate", "--level", "2", "--platform", "posix", "--path", str(temp_dir)])
        assert result.exit_code == 0, result.output

        config = (temp_dir / ".pre-commit-config.yaml").read_text(encoding="utf-8")
        assert "id: flake8" in config
        assert "id: emoji-ai-detector" not in config
        manifest = (temp_dir / "requirements.dev.assist.txt").read_text(encoding="utf-8")
        assert "semgrep>=1.45.0" in manifest
        assert "mypy>=1.6.0" not in manifest

    def test_generate_windows_advanced(self, temp_dir: Path):
        """Test platform and advanced options."""
        result = CliRunner().invoke(
            main, ["generate", "-l", "3", "--platform", "windows", "--advanced", "-p", str(temp_dir)]
        )
        assert result.exit_code == 0, result.output
        config = (temp_dir / ".pre-commit-config.yaml").read_text(encoding="utf-8")
        assert "id: enterprise-security-scan" in config
        assert "powershell -NoProfile -Command" in config

    def test_invalid_level(self, temp_dir: Path):
        """Test an invalid level shows an error and writes nothing."""
        result = CliRunner().invoke(main, ["generate", "--level", "5", "--path", str(temp_dir)])
        assert result.exit_code == 1
        assert "Security level" in result.output
        for name in OUTPUTS:
            assert not (temp_dir / name).exists()

    def test_write_failure(self, temp_dir: Path):
        """Test an unwritable root exits with status 1."""
        with patch("stackguard.layers.l3_rendering.writer.os.replace", side_effect=PermissionError("denied")):
            result = CliRunner().invoke(main, ["generate", "--level", "1", "--path", str(temp_dir)])
        assert result.exit_code == 1
        assert "Setup Failed" in result.output
