"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from stackguard.layers.l1_detection.rules import tag_label
from stackguard.layers.l3_rendering.dialects import os_display_name
from stackguard.models.signal import TagSet
from stackguard.models.tool_group import SecurityTier
from stackguard.workflow.precommit_setup import SetupResult

console = Console()

BANNER = r"""
[bold cyan]
   ______             __   _____                     __
  / __/ /____ _______/ /__/ ___/_ _____ ________ ___/ /
 _\ \/ __/ _ `/ __/  '_/ (_ / // / _ `/ __/ _  / _  /
/___/\__/\_,_/\__/_/\_\\___/\_,_/\_,_/_/  \_,_/\_,_/
[/bold cyan]
[dim]Stack-aware pre-commit security configuration[/dim]
"""

QUICK_START = (
    "pip install -r {manifest}",
    "pre-commit install",
    "pre-commit run --all-files",
)

DAILY_WORKFLOW = (
    "Before every commit: pre-commit run --all-files",
    "Fix any issues found, then commit normally",
    'Emergency bypass: git commit --no-verify -m "message"',
)

HOOK_COMMANDS = (
    ("Secrets", ("gitleaks", "trufflehog")),
    ("AI detection", ("emoji-ai-detector",)),
    ("Package security", ("package-vulnerability-scan",)),
    ("All security", ("enterprise-patterns",)),
)


def show_banner() -> None:
    """Display the banner with the detected operating system."""
    console.print()
    console.print(Panel(BANNER, border_style="cyan", padding=(0, 2)))
    console.print(f"[dim]Operating system:[/] [bold]{os_display_name()}[/]")
    console.print()


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{message}[/]",
            title=f"[bold]{title}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_info(title: str, message: str) -> None:
    """Display an info message."""
    console.print()
    console.print(
        Panel(
            message,
            title=f"[bold]{title}[/]",
            border_style="blue",
        )
    )


def show_detected_tech(tags: TagSet) -> None:
    """Display the detected technologies with their labels and origins.

    Args:
        tags: Classified tag set.
    """
    console.print()
    table = Table(title="[bold]Detected Technologies[/]")
    table.add_column("Tag", style="cyan")
    table.add_column("Technology", style="white")
    table.add_column("Detected From", style="dim")

    for tag in tags.sorted():
        origin = tags.origin_of(tag)
        table.add_row(tag, tag_label(tag), origin.value if origin else "-")

    console.print(table)

    if tags.is_generic:
        console.print("[dim]No specific technologies recognized, so no technology tool groups apply.[/]")


def show_results(result: SetupResult) -> None:
    """Display the setup summary, written files and usage hints.

    Args:
        result: Completed setup result.
    """
    configuration = result.configuration
    if configuration is None:
        return

    console.print()
    table = Table(title="[bold]Setup Summary[/]", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Security Level", str(configuration.security_level))
    table.add_row("Hooks", str(len(configuration.groups)))
    for tier in SecurityTier:
        groups = configuration.by_tier(tier)
        if groups:
            table.add_row(f"  {tier.value.title()}", ", ".join(group.identifier for group in groups))
    if result.team_size:
        table.add_row("Team Size", result.team_size)
    for path in result.written:
        table.add_row("Generated", path.name)
    console.print(table)

    if configuration.applied_rules:
        console.print()
        console.print("[bold]Applied Rules:[/]")
        for rule in configuration.applied_rules:
            console.print(f"  [green]{escape('[APPLIED]')}[/] {escape(rule)}")

    manifest = result.artifacts.manifest_file if result.artifacts else "requirements.dev.assist.txt"
    console.print()
    console.print("[bold]Quick Start Commands:[/]")
    for command in QUICK_START:
        console.print(f"  {command.format(manifest=manifest)}")

    console.print()
    console.print("[bold]Daily Workflow:[/]")
    for step in DAILY_WORKFLOW:
        console.print(f"  - {escape(step)}")

    present = set(configuration.identifiers)
    commands = [(label, ids) for label, ids in HOOK_COMMANDS if present.issuperset(ids)]
    if commands:
        console.print()
        console.print("[bold]Specific Security Commands:[/]")
        for label, ids in commands:
            console.print(f"  - {label}: pre-commit run {' '.join(ids)} --all-files")
