"""Interactive prompts for CLI using questionary."""

import questionary
from questionary import Style

# Custom style for questionary prompts
CUSTOM_STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
        ("separator", "fg:gray"),
        ("instruction", "fg:gray"),
        ("text", ""),
    ]
)

TEAM_SIZE_LABELS = {
    "small": "Small (1-10 developers)",
    "medium": "Medium (10-20 developers)",
    "large": "Large enterprise (20+ developers)",
}

SECURITY_LEVEL_LABELS = {
    1: "Basic (essential tools)",
    2: "Standard (comprehensive)",
    3: "Maximum (enterprise-grade)",
}


def ask_advanced_options() -> bool | None:
    """Ask whether to enable advanced customization.

    Returns:
        True to add the enterprise scanner, None if cancelled.
    """
    return questionary.confirm(
        "Would you like advanced customization options?",
        default=False,
        style=CUSTOM_STYLE,
    ).ask()


def select_team_size() -> str | None:
    """Ask for the team size tier.

    Returns:
        'small', 'medium' or 'large', None if cancelled.
    """
    return questionary.select(
        "Team size?",
        choices=[questionary.Choice(label, value=value) for value, label in TEAM_SIZE_LABELS.items()],
        style=CUSTOM_STYLE,
    ).ask()


def select_security_level(default: int = 3) -> int | None:
    """Ask for the security level.

    Args:
        default: Level highlighted initially.

    Returns:
        Level 1 to 3, None if cancelled.
    """
    choices = [
        questionary.Choice(f"{level}) {label}", value=level) for level, label in SECURITY_LEVEL_LABELS.items()
    ]
    return questionary.select(
        "Security level?",
        choices=choices,
        default=choices[default - 1],
        style=CUSTOM_STYLE,
    ).ask()
