"""Main CLI entry point for StackGuard."""

import json
from pathlib import Path
from typing import NoReturn

import click

from stackguard.cli.display import (
    console,
    show_banner,
    show_detected_tech,
    show_error,
    show_info,
    show_results,
    show_success,
)
from stackguard.cli.prompts import ask_advanced_options, select_security_level, select_team_size
from stackguard.core.config.settings import Settings, get_settings
from stackguard.core.exceptions.errors import StackGuardError
from stackguard.core.logger.logger import setup_logging
from stackguard.workflow.precommit_setup import PrecommitSetup, SetupConfig, SetupResult


def load_settings(config_path: str | None) -> Settings:
    """Load settings from an explicit file or the default locations.

    Args:
        config_path: YAML settings file given with --config.

    Returns:
        Settings instance.
    """
    settings = Settings.from_yaml(Path(config_path)) if config_path else get_settings()
    setup_logging(settings.logging)
    return settings


def _fail(error: StackGuardError) -> NoReturn:
    show_error("Setup Failed", str(error))
    raise SystemExit(1)


def run_quick_mode(setup: PrecommitSetup, root: Path) -> SetupResult:
    """Generate at the default security level without asking anything."""
    console.print("[bold]Quick Setup Mode[/] - automatic enterprise configuration")
    level = setup.settings.generation.default_security_level
    result = setup.run(root, SetupConfig(security_level=level))
    show_detected_tech(result.tags)
    show_results(result)
    return result


def run_interactive_mode(setup: PrecommitSetup, root: Path) -> SetupResult | None:
    """Show the detected stack, ask three questions, then generate.

    Returns:
        Setup result, or None when a prompt was cancelled.
    """
    console.print("[bold]Interactive Setup Mode[/] - customization available")
    result = setup.detect(root)
    show_detected_tech(result.tags)

    advanced = ask_advanced_options()
    if advanced is None:
        show_info("Cancelled", "No files were written.")
        return None

    team_size = select_team_size()
    if team_size is None:
        show_info("Cancelled", "No files were written.")
        return None

    level = select_security_level(default=setup.settings.generation.default_security_level)
    if level is None:
        show_info("Cancelled", "No files were written.")
        return None

    console.print()
    console.print("[cyan]Generating configuration based on your preferences...[/]")
    config = SetupConfig(security_level=level, advanced=advanced, team_size=team_size)
    result = setup.generate(root, config, result=result)
    show_results(result)
    return result


def run_detect_only(setup: PrecommitSetup, root: Path) -> SetupResult:
    """Scan and report without writing any file."""
    result = setup.run(root, SetupConfig(detect_only=True))
    show_detected_tech(result.tags)
    show_info("Detect Only", "Detection complete. No files were written.")
    return result


@click.group(invoke_without_command=True)
@click.option("--interactive", "-i", is_flag=True, help="Ask for advanced options, team size and security level")
@click.option("--detect-only", is_flag=True, help="Detect technologies without writing any file")
@click.option("--path", "-p", default=".", type=click.Path(exists=True, file_okay=False), help="Project root")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Settings YAML file")
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def main(
    ctx: click.Context,
    interactive: bool,
    detect_only: bool,
    path: str,
    config_path: str | None,
    version: bool,
) -> None:
    """StackGuard - stack-aware pre-commit security configuration.

    Run without arguments for quick mode at the default security level.
    """
    if version:
        from stackguard import __version__

        click.echo(f"StackGuard version {__version__}")
        return

    try:
        settings = load_settings(config_path)
    except StackGuardError as e:
        _fail(e)

    ctx.obj = {"settings": settings, "path": Path(path)}

    if ctx.invoked_subcommand is not None:
        return

    setup = PrecommitSetup(settings=settings)
    root = Path(path)
    show_banner()

    try:
        if detect_only:
            run_detect_only(setup, root)
        elif interactive:
            run_interactive_mode(setup, root)
        else:
            run_quick_mode(setup, root)
    except KeyboardInterrupt:
        console.print()
        show_info("Interrupted", "Operation cancelled by user. No files were written.")
    except StackGuardError as e:
        _fail(e)


@main.command()
@click.option("--path", "-p", type=click.Path(exists=True, file_okay=False), help="Project root")
@click.option("--json", "as_json", is_flag=True, help="Print tags and signal counts as JSON")
@click.pass_context
def detect(ctx: click.Context, path: str | None, as_json: bool) -> None:
    """Detect the technology stack of a project.

    Example:
        stackguard detect --path /path/to/project
        stackguard detect --json
    """
    root = Path(path) if path else ctx.obj["path"]
    setup = PrecommitSetup(settings=ctx.obj["settings"])
    result = setup.detect(root)

    if as_json:
        payload = {
            "tags": result.tags.sorted(),
            "origins": {tag: result.tags.origins[tag].value for tag in result.tags.sorted()},
            "signals": result.signal_counts,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    show_detected_tech(result.tags)


@main.command()
@click.option("--path", "-p", type=click.Path(exists=True, file_okay=False), help="Project root")
@click.option("--level", "-l", type=int, help="Security level (1-3)")
@click.option(
    "--platform",
    type=click.Choice(["auto", "posix", "windows"]),
    help="Command dialect for native detector hooks",
)
@click.option("--advanced", is_flag=True, help="Add the enterprise security scanner")
@click.pass_context
def generate(
    ctx: click.Context,
    path: str | None,
    level: int | None,
    platform: str | None,
    advanced: bool,
) -> None:
    """Generate the pre-commit configuration and tool manifest.

    Example:
        stackguard generate --level 2
        stackguard generate -p . --level 3 --platform windows --advanced
    """
    settings: Settings = ctx.obj["settings"]
    root = Path(path) if path else ctx.obj["path"]
    config = SetupConfig(
        security_level=level if level is not None else settings.generation.default_security_level,
        advanced=advanced,
        platform=platform,
    )

    try:
        result = PrecommitSetup(settings=settings).generate(root, config)
    except StackGuardError as e:
        _fail(e)

    show_detected_tech(result.tags)
    show_results(result)
    show_success("Setup Complete", "Pre-commit configuration generated.")


if __name__ == "__main__":
    main()
