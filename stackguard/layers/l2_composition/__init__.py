"""L2 Composition Layer - tool group catalog, rule composer and tool manifest."""

from stackguard.layers.l2_composition.catalog import (
    ADVANCED_SECURITY,
    BASE_SECURITY,
    ENHANCED_SECURITY,
    MAXIMUM_SECURITY,
    SECURITY_GROUPS,
    TECHNOLOGY_RULES,
    TechnologyRule,
)
from stackguard.layers.l2_composition.composer import (
    SECURITY_LEVELS,
    RuleComposer,
    compose,
    deduplicate,
    validate_security_level,
)
from stackguard.layers.l2_composition.manifest import (
    MANIFEST_TIERS,
    build_manifest,
    render_manifest,
)

__all__ = [
    "RuleComposer",
    "compose",
    "deduplicate",
    "validate_security_level",
    "SECURITY_LEVELS",
    "TechnologyRule",
    "TECHNOLOGY_RULES",
    "BASE_SECURITY",
    "ENHANCED_SECURITY",
    "MAXIMUM_SECURITY",
    "SECURITY_GROUPS",
    "ADVANCED_SECURITY",
    "MANIFEST_TIERS",
    "build_manifest",
    "render_manifest",
]
