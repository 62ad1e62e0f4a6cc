"""Catalog of security and technology tool groups.

Security groups are gated only by security level. Technology rules are
gated by the detected tag set and may gate individual tools on security
level as well.
"""

from dataclasses import dataclass

from stackguard.models.signal import TagSet
from stackguard.models.tool_group import (
    LOCAL_SOURCE,
    DetectorKind,
    DetectorSpec,
    SecurityTier,
    ToolGroup,
    ToolSource,
)

# =============================================================================
# Native detectors
# =============================================================================

PACKAGE_AUDIT = DetectorSpec(
    kind=DetectorKind.PACKAGE_AUDIT,
    audits=(
        ("package.json", "npm audit --audit-level moderate"),
        ("requirements.txt", "pip-audit --desc -r requirements.txt"),
    ),
    success_message="Package scan completed",
)

ENTERPRISE_PATTERNS = DetectorSpec(
    kind=DetectorKind.CONTENT,
    pattern=r"(@shell\.com|@sede\.com|password\s*=|api[_-]?key\s*[=:])",
    case_insensitive=True,
    exclude_globs=("README*", "*.test.*"),
    banner="ENTERPRISE SECURITY PATTERNS",
    success_message="Enterprise patterns check passed - no sensitive patterns found",
)

CONSOLE_LOG = DetectorSpec(
    kind=DetectorKind.CONTENT,
    pattern=r"console\.log",
    include_globs=("*.js", "*.jsx", "*.ts", "*.tsx"),
    banner="CONSOLE.LOG STATEMENTS",
    success_message="No console.log found",
)

EMOJI_CONTENT = DetectorSpec(
    kind=DetectorKind.CONTENT,
    codepoint_ranges=((0x1F600, 0x1F64F), (0x1F300, 0x1F5FF), (0x1F680, 0x1F6FF)),
    banner="EMOJI/AI CONTENT",
    success_message="No emojis found - content appears human-generated",
)

ENCODED_CONTENT = DetectorSpec(
    kind=DetectorKind.CONTENT,
    pattern=r"(base64|btoa|atob|-----BEGIN|-----END|[A-Za-z0-9+/]{40,}=)",
    banner="ENCODED/CIPHER CONTENT",
    success_message="No suspicious encoded content found",
)

CERTIFICATE_FILES = DetectorSpec(
    kind=DetectorKind.FILE_NAME,
    include_globs=("*.p12", "*.pfx", "*.pem", "*.crt", "*.cer", "*.key", "*.jks", "*.keystore"),
    banner="DIGITAL CERTIFICATES/SIGNATURES",
    success_message="No digital signatures found",
)

SUSPICIOUS_EXECUTION = DetectorSpec(
    kind=DetectorKind.CONTENT,
    pattern=(
        r"(eval\(|exec\(|system\(|shell_exec|passthru|popen|proc_open"
        r"|file_get_contents\(.*http|curl_exec|wget|powershell|cmd\.exe)"
    ),
    case_insensitive=True,
    banner="SUSPICIOUS EXECUTION PATTERNS",
    success_message="No suspicious execution patterns found",
)

ENTERPRISE_SOURCE_SCAN = DetectorSpec(
    kind=DetectorKind.CONTENT,
    pattern=(
        r"(@shell\.com|@sede\.com|password\s*[:=]\s*\S+|secret\s*[:=]\s*\S+"
        r"|api[_-]?key\s*[:=]|console\.log\()"
    ),
    case_insensitive=True,
    include_globs=("*.js", "*.jsx", "*.ts", "*.tsx", "*.py", "*.cs", "*.sql", "*.json", "*.yaml", "*.yml"),
    banner="ENTERPRISE SECURITY VIOLATIONS",
    success_message="Enterprise security scan passed",
)


def _detector_hook(identifier: str, name: str, detector: DetectorSpec, tier: SecurityTier, level: int) -> ToolGroup:
    return ToolGroup(
        identifier=identifier,
        display_name=name,
        source=LOCAL_SOURCE,
        tier=tier,
        required_security_level=level,
        detector=detector,
        language="system",
        pass_filenames=False,
    )


# =============================================================================
# Security groups
# =============================================================================

_GITLEAKS = ToolSource(repo="https://github.com/gitleaks/gitleaks", rev="v8.18.0")
_TRUFFLEHOG = ToolSource(repo="https://github.com/trufflesecurity/trufflehog", rev="v3.63.2-rc0")
_PRECOMMIT_HOOKS = ToolSource(repo="https://github.com/pre-commit/pre-commit-hooks", rev="v4.4.0")
_DETECT_SECRETS = ToolSource(repo="https://github.com/Yelp/detect-secrets", rev="v1.4.0")

BASE_SECURITY: tuple[ToolGroup, ...] = (
    ToolGroup(
        identifier="gitleaks",
        display_name="Gitleaks - Detect Secrets",
        source=_GITLEAKS,
        tier=SecurityTier.BASE,
        entry="gitleaks detect --verbose --redact --no-git",
        language="system",
    ),
    ToolGroup(
        identifier="trufflehog",
        display_name="TruffleHog - Advanced Secret Detection",
        source=_TRUFFLEHOG,
        tier=SecurityTier.BASE,
        entry="trufflehog git file://./ --only-verified --fail",
        language="system",
    ),
)


def _hygiene_hook(identifier: str, name: str, args: tuple[str, ...] = ()) -> ToolGroup:
    return ToolGroup(
        identifier=identifier,
        display_name=name,
        source=_PRECOMMIT_HOOKS,
        tier=SecurityTier.ENHANCED,
        required_security_level=2,
        args=args,
    )


ENHANCED_SECURITY: tuple[ToolGroup, ...] = (
    _hygiene_hook("detect-private-key", "Detect Private Keys"),
    _hygiene_hook("check-merge-conflict", "Check Merge Conflicts"),
    _hygiene_hook("check-added-large-files", "Check Large Files", ("--maxkb=1000",)),
    _hygiene_hook("end-of-file-fixer", "Fix End of Files"),
    _hygiene_hook("trailing-whitespace", "Trim Trailing Whitespace"),
    ToolGroup(
        identifier="detect-secrets",
        display_name="Detect Secrets - Advanced Pattern Detection",
        source=_DETECT_SECRETS,
        tier=SecurityTier.ENHANCED,
        required_security_level=2,
        args=("--baseline", ".secrets.baseline"),
        exclude="package-lock.json|yarn.lock|poetry.lock",
    ),
    _detector_hook(
        "package-vulnerability-scan",
        "Package Vulnerability Scanning",
        PACKAGE_AUDIT,
        SecurityTier.ENHANCED,
        2,
    ),
)

MAXIMUM_SECURITY: tuple[ToolGroup, ...] = (
    _detector_hook(
        "enterprise-patterns",
        "Enterprise Security Pattern Detection",
        ENTERPRISE_PATTERNS,
        SecurityTier.MAXIMUM,
        3,
    ),
    _detector_hook(
        "console-log-detector",
        "Console.log Detection (Production)",
        CONSOLE_LOG,
        SecurityTier.MAXIMUM,
        3,
    ),
    _detector_hook(
        "emoji-ai-detector",
        "Emoji/AI Content Detection",
        EMOJI_CONTENT,
        SecurityTier.MAXIMUM,
        3,
    ),
    _detector_hook(
        "encoding-cipher-detector",
        "Encoded/Cipher Content Detection",
        ENCODED_CONTENT,
        SecurityTier.MAXIMUM,
        3,
    ),
    _detector_hook(
        "digital-signature-detector",
        "Digital Signature Detection",
        CERTIFICATE_FILES,
        SecurityTier.MAXIMUM,
        3,
    ),
    _detector_hook(
        "suspicious-strings-detector",
        "Suspicious String Patterns Detection",
        SUSPICIOUS_EXECUTION,
        SecurityTier.MAXIMUM,
        3,
    ),
)

SECURITY_GROUPS: tuple[ToolGroup, ...] = BASE_SECURITY + ENHANCED_SECURITY + MAXIMUM_SECURITY

ADVANCED_SECURITY: tuple[ToolGroup, ...] = (
    _detector_hook(
        "enterprise-security-scan",
        "Enterprise Security Scanner",
        ENTERPRISE_SOURCE_SCAN,
        SecurityTier.ADVANCED,
        1,
    ),
)

ADVANCED_SUMMARY = "Enterprise Security: Email/Secret/Console scanning"

# =============================================================================
# Technology rules
# =============================================================================


@dataclass(frozen=True)
class TechnologyRule:
    """Tool groups applied when any of the listed tags is detected."""

    name: str
    any_of: tuple[str, ...]
    groups: tuple[ToolGroup, ...]

    def applies(self, tags: TagSet) -> bool:
        return tags.has_any(self.any_of)

    def groups_for(self, security_level: int) -> list[ToolGroup]:
        return [group for group in self.groups if group.required_security_level <= security_level]

    def describe(self, groups: list[ToolGroup]) -> str:
        """Summary line such as ``Python: Black + Flake8 + Bandit``."""
        tools = " + ".join(group.display_name.split(" - ")[0] for group in groups)
        return f"{self.name}: {tools}"


def _tech(
    identifier: str,
    name: str,
    source: ToolSource,
    level: int = 1,
    **fields: object,
) -> ToolGroup:
    return ToolGroup(
        identifier=identifier,
        display_name=name,
        source=source,
        tier=SecurityTier.TECHNOLOGY,
        required_security_level=level,
        **fields,
    )


TECHNOLOGY_RULES: tuple[TechnologyRule, ...] = (
    TechnologyRule(
        name="JavaScript/TypeScript",
        any_of=("react-frontend", "nodejs", "typescript", "react", "vuejs", "angular"),
        groups=(
            _tech(
                "eslint",
                "ESLint - JavaScript/TypeScript Linting",
                ToolSource(repo="https://github.com/pre-commit/mirrors-eslint", rev="v8.50.0"),
                files=r"\.(js|jsx|ts|tsx)$",
                args=("--fix", "--max-warnings=0"),
            ),
            _tech(
                "prettier",
                "Prettier - Code Formatting",
                ToolSource(repo="https://github.com/pre-commit/mirrors-prettier", rev="v3.0.3"),
                level=2,
                files=r"\.(js|jsx|ts|tsx|json|css|scss|md)$",
                args=("--write",),
            ),
        ),
    ),
    TechnologyRule(
        name="Python",
        any_of=("python", "python-source", "python-modern"),
        groups=(
            _tech(
                "black",
                "Black - Python Code Formatting",
                ToolSource(repo="https://github.com/psf/black", rev="23.9.1"),
                language_version="python3",
            ),
            _tech(
                "flake8",
                "Flake8 - Python Linting",
                ToolSource(repo="https://github.com/pycqa/flake8", rev="6.1.0"),
                level=2,
                args=("--max-line-length=100", "--ignore=E203,W503"),
            ),
            _tech(
                "bandit",
                "Bandit - Python Security Analysis",
                ToolSource(repo="https://github.com/pycqa/bandit", rev="1.7.5"),
                level=2,
                args=("-r", ".", "-f", "json", "-o", "bandit-report.json"),
            ),
        ),
    ),
    TechnologyRule(
        name="SQL",
        any_of=("sql", "sql-enterprise"),
        groups=(
            _tech(
                "sqlfluff-lint",
                "SQLFluff - SQL Linting",
                ToolSource(repo="https://github.com/sqlfluff/sqlfluff", rev="2.3.2"),
                files=r"\.sql$",
                args=("--dialect=tsql",),
            ),
        ),
    ),
    TechnologyRule(
        name=".NET",
        any_of=("dotnet", "aspnet"),
        groups=(
            _tech(
                "dotnet-format",
                "dotnet format - .NET Code Formatting",
                LOCAL_SOURCE,
                entry="dotnet format --verify-no-changes",
                language="system",
                files=r"\.(cs|vb)$",
                pass_filenames=False,
            ),
        ),
    ),
    TechnologyRule(
        name="Docker",
        any_of=("docker",),
        groups=(
            _tech(
                "hadolint-docker",
                "Hadolint - Dockerfile Linting",
                ToolSource(repo="https://github.com/hadolint/hadolint", rev="v2.12.0"),
                files="Dockerfile.*",
            ),
        ),
    ),
)
