"""Tool manifest: installable version constraints per security level."""

from stackguard.models.configuration import Configuration, ToolManifest

# Each tier is added once its level is reached
MANIFEST_TIERS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (
        1,
        (
            "pre-commit>=3.5.0",
            "gitleaks>=8.18.0",
            "detect-secrets>=1.4.0",
            "safety>=2.3.5",
        ),
    ),
    (
        2,
        (
            "bandit[toml]>=1.7.5",
            "black>=23.9.1",
            "flake8>=6.1.0",
            "sqlfluff>=2.3.2",
            "semgrep>=1.45.0",
            "checkov>=3.0.0",
        ),
    ),
    (
        3,
        (
            "mypy>=1.6.0",
            "pylint>=3.0.0",
            "trufflehog>=3.63.0",
            "pip-audit>=2.6.1",
            "cyclonedx-bom>=4.0.0",
            "osv-scanner>=1.4.3",
            "vulndb>=1.0.0",
        ),
    ),
)

MANIFEST_HEADER = (
    "# Universal Smart Pre-commit Requirements",
    "# Comprehensive enterprise security and quality tools",
    "# Includes vulnerability scanning and content analysis",
)

MANIFEST_TRAILER = (
    "# Additional security validation",
    "# Run: pip-audit --desc --output json",
    "# Run: safety check --json",
    "# Run: osv-scanner --lockfile requirements.txt",
)


def build_manifest(configuration: Configuration) -> ToolManifest:
    """Accumulate the manifest tiers up to the configuration's level.

    Args:
        configuration: Composed configuration.

    Returns:
        Deduplicated manifest in tier order.
    """
    requirements: list[str] = []
    for level, tier in MANIFEST_TIERS:
        if level > configuration.security_level:
            continue
        for requirement in tier:
            if requirement not in requirements:
                requirements.append(requirement)
    return ToolManifest(security_level=configuration.security_level, requirements=tuple(requirements))


def render_manifest(manifest: ToolManifest) -> str:
    """Render the manifest as a requirements-style text document."""
    lines = [*MANIFEST_HEADER, ""]
    lines.extend(manifest.requirements)
    lines.append("")
    lines.extend(MANIFEST_TRAILER)
    return "\n".join(lines) + "\n"
