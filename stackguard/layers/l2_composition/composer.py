"""Rule composer: selects tool groups for a tag set and security level."""

from collections.abc import Iterable

from stackguard.core.exceptions.errors import ConfigurationError
from stackguard.core.logger.logger import get_logger
from stackguard.layers.l2_composition.catalog import (
    ADVANCED_SECURITY,
    ADVANCED_SUMMARY,
    SECURITY_GROUPS,
    TECHNOLOGY_RULES,
    TechnologyRule,
)
from stackguard.models.configuration import Configuration
from stackguard.models.signal import TagSet
from stackguard.models.tool_group import ToolGroup

SECURITY_LEVELS = (1, 2, 3)


def validate_security_level(security_level: object) -> int:
    """Check that a security level is one of 1, 2 or 3.

    Args:
        security_level: Requested level.

    Returns:
        The level as an int.

    Raises:
        ConfigurationError: If the level is not a supported integer.
    """
    if isinstance(security_level, bool) or not isinstance(security_level, int):
        raise ConfigurationError(
            f"Security level must be an integer, got {security_level!r}",
            config_key="security_level",
        )
    if security_level not in SECURITY_LEVELS:
        raise ConfigurationError(
            f"Security level must be one of {SECURITY_LEVELS}, got {security_level}",
            config_key="security_level",
            details={"allowed": list(SECURITY_LEVELS)},
        )
    return security_level


def deduplicate(groups: Iterable[ToolGroup]) -> list[ToolGroup]:
    """Drop repeated identifiers, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[ToolGroup] = []
    for group in groups:
        if group.identifier in seen:
            continue
        seen.add(group.identifier)
        unique.append(group)
    return unique


class RuleComposer:
    """Builds a Configuration from detected tags.

    Composition order is fixed:
    1. Security groups whose required level is met (base, enhanced, maximum)
    2. Technology rules in table order, for every rule matching a detected tag
    3. Advanced groups, when requested
    """

    def __init__(self, technology_rules: Iterable[TechnologyRule] = TECHNOLOGY_RULES) -> None:
        self.logger = get_logger(__name__)
        self.technology_rules = tuple(technology_rules)

    def compose(self, tags: TagSet, security_level: int, advanced: bool = False) -> Configuration:
        """Compose the tool groups for a project.

        Args:
            tags: Detected technology tags.
            security_level: Requested security level, 1 to 3.
            advanced: Add the enterprise source scanner.

        Returns:
            Ordered, deduplicated configuration.

        Raises:
            ConfigurationError: If the security level is invalid.
        """
        level = validate_security_level(security_level)

        groups = [group for group in SECURITY_GROUPS if group.required_security_level <= level]
        applied: list[str] = []

        for rule in self.technology_rules:
            if not rule.applies(tags):
                continue
            selected = rule.groups_for(level)
            if not selected:
                continue
            groups.extend(selected)
            applied.append(rule.describe(selected))
            self.logger.debug(f"Applied {rule.name} rule: {[g.identifier for g in selected]}")

        if advanced:
            groups.extend(ADVANCED_SECURITY)
            applied.append(ADVANCED_SUMMARY)

        configuration = Configuration(
            security_level=level,
            tags=tags,
            groups=tuple(deduplicate(groups)),
            applied_rules=tuple(applied),
        )
        self.logger.info(
            f"Composed {len(configuration.groups)} hooks at security level {level} "
            f"({len(applied)} technology rule(s))"
        )
        return configuration


def compose(tags: TagSet, security_level: int, advanced: bool = False) -> Configuration:
    """Compose with the built-in catalog."""
    return RuleComposer().compose(tags, security_level, advanced=advanced)
