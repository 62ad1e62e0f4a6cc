"""Tests for the rule composer and tool group catalog."""

import pytest
from pydantic import ValidationError

from stackguard.core.exceptions.errors import ConfigurationError
from stackguard.layers.l2_composition.catalog import (
    ADVANCED_SUMMARY,
    BASE_SECURITY,
    ENHANCED_SECURITY,
    MAXIMUM_SECURITY,
    TECHNOLOGY_RULES,
    TechnologyRule,
)
from stackguard.layers.l2_composition.composer import RuleComposer, compose, deduplicate
from stackguard.models.configuration import Configuration
from stackguard.models.signal import TagSet
from stackguard.models.tool_group import LOCAL_SOURCE, DetectorKind, DetectorSpec, SecurityTier, ToolGroup, ToolSource

BASE_IDS = ["gitleaks", "trufflehog"]
ENHANCED_IDS = [
    "detect-private-key",
    "check-merge-conflict",
    "check-added-large-files",
    "end-of-file-fixer",
    "trailing-whitespace",
    "detect-secrets",
    "package-vulnerability-scan",
]
MAXIMUM_IDS = [
    "enterprise-patterns",
    "console-log-detector",
    "emoji-ai-detector",
    "encoding-cipher-detector",
    "digital-signature-detector",
    "suspicious-strings-detector",
]


class TestCatalog:
    """Tests for the built-in catalog."""

    def test_security_tiers(self):
        """Test catalog tiers hold the expected hooks."""
        assert [g.identifier for g in BASE_SECURITY] == BASE_IDS
        assert [g.identifier for g in ENHANCED_SECURITY] == ENHANCED_IDS
        assert [g.identifier for g in MAXIMUM_SECURITY] == MAXIMUM_IDS

    def test_base_groups_are_unconditional(self):
        """Test base groups apply from level 1."""
        assert all(g.required_security_level == 1 for g in BASE_SECURITY)

    def test_remote_sources_are_pinned(self):
        """Test every remote hook has a revision."""
        groups = [*BASE_SECURITY, *ENHANCED_SECURITY, *MAXIMUM_SECURITY]
        groups += [g for rule in TECHNOLOGY_RULES for g in rule.groups]
        for group in groups:
            assert group.source.is_local or group.source.rev

    def test_detector_hooks_do_not_take_filenames(self):
        """Test native detector hooks run once per commit."""
        for group in [*ENHANCED_SECURITY, *MAXIMUM_SECURITY]:
            if group.is_native:
                assert group.pass_filenames is False
                assert group.language == "system"

    def test_rule_order(self):
        """Test technology rules keep their fixed order."""
        assert [rule.name for rule in TECHNOLOGY_RULES] == [
            "JavaScript/TypeScript",
            "Python",
            "SQL",
            ".NET",
            "Docker",
        ]

    def test_describe(self):
        """Test rule summaries use the short tool names."""
        python = TECHNOLOGY_RULES[1]
        assert python.describe(python.groups_for(2)) == "Python: Black + Flake8 + Bandit"
        assert python.describe(python.groups_for(1)) == "Python: Black"


class TestSecurityLevels:
    """Tests for security level gating."""

    def test_level_one(self):
        """Test level 1 holds only the base group for a generic project."""
        configuration = compose(TagSet.of(["generic"]), 1)
        assert configuration.identifiers == BASE_IDS
        assert configuration.applied_rules == ()

    def test_level_two(self):
        """Test level 2 adds the enhanced group."""
        configuration = compose(TagSet.of(["generic"]), 2)
        assert configuration.identifiers == BASE_IDS + ENHANCED_IDS

    def test_level_three(self):
        """Test level 3 adds the maximum group."""
        configuration = compose(TagSet.of(["generic"]), 3)
        assert configuration.identifiers == BASE_IDS + ENHANCED_IDS + MAXIMUM_IDS

    @pytest.mark.parametrize("level", [0, 4, -1, "3", 2.0, True, None])
    def test_invalid_level(self, level):
        """Test unsupported levels raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            compose(TagSet.of(["generic"]), level)
        assert exc_info.value.details["config_key"] == "security_level"


class TestTechnologyRules:
    """Tests for technology rule selection."""

    def test_python_level_one(self):
        """Test Python gets Black at level 1."""
        configuration = compose(TagSet.of(["python"]), 1)
        assert configuration.identifiers == BASE_IDS + ["black"]
        assert configuration.applied_rules == ("Python: Black",)

    def test_python_level_two(self):
        """Test Python gets the full toolset at level 2."""
        configuration = compose(TagSet.of(["python-modern"]), 2)
        technology = [g.identifier for g in configuration.by_tier(SecurityTier.TECHNOLOGY)]
        assert technology == ["black", "flake8", "bandit"]

    def test_javascript_once(self):
        """Test many JavaScript tags still produce one eslint hook."""
        configuration = compose(TagSet.of(["nodejs", "typescript", "react", "react-frontend"]), 3)
        assert configuration.identifiers.count("eslint") == 1
        assert configuration.get("eslint").files == r"\.(js|jsx|ts|tsx)$"
        assert configuration.get("prettier") is not None

    def test_rules_in_table_order(self):
        """Test technology groups follow the rule table order."""
        tags = TagSet.of(["docker", "sql", "python", "nodejs", "aspnet"])
        technology = [g.identifier for g in compose(tags, 1).by_tier(SecurityTier.TECHNOLOGY)]
        assert technology == ["eslint", "black", "sqlfluff-lint", "dotnet-format", "hadolint-docker"]

    def test_unmatched_tags(self):
        """Test tags without rules add nothing."""
        configuration = compose(TagSet.of(["terraform", "jest"]), 2)
        assert configuration.by_tier(SecurityTier.TECHNOLOGY) == []

    def test_custom_rules(self):
        """Test rules can be injected."""
        tool = ToolGroup(
            identifier="gofmt",
            display_name="gofmt - Go Formatting",
            source=LOCAL_SOURCE,
            tier=SecurityTier.TECHNOLOGY,
            entry="gofmt -l .",
            language="system",
        )
        composer = RuleComposer(technology_rules=[TechnologyRule(name="Go", any_of=("go",), groups=(tool,))])
        configuration = composer.compose(TagSet.of(["go"]), 1)
        assert configuration.identifiers[-1] == "gofmt"
        assert configuration.applied_rules == ("Go: gofmt",)


class TestAdvanced:
    """Tests for the advanced option."""

    def test_advanced_scanner_last(self):
        """Test the enterprise scanner is appended after technology groups."""
        configuration = compose(TagSet.of(["python"]), 1, advanced=True)
        assert configuration.identifiers[-1] == "enterprise-security-scan"
        assert configuration.applied_rules[-1] == ADVANCED_SUMMARY

    def test_advanced_off_by_default(self):
        """Test the enterprise scanner is not added by default."""
        assert "enterprise-security-scan" not in compose(TagSet.of(["python"]), 3).identifiers


class TestInvariants:
    """Tests for composition invariants."""

    def test_deduplicate_keeps_first(self):
        """Test duplicates are dropped after the first occurrence."""
        first = BASE_SECURITY[0]
        duplicate = first.model_copy(update={"display_name": "Other"})
        result = deduplicate([first, BASE_SECURITY[1], duplicate])
        assert [g.display_name for g in result] == [first.display_name, BASE_SECURITY[1].display_name]

    def test_tier_order(self):
        """Test tiers never go backwards."""
        tags = TagSet.of(["python", "nodejs", "sql", "docker", "dotnet"])
        configuration = compose(tags, 3, advanced=True)
        ranks = [g.tier.rank for g in configuration.groups]
        assert ranks == sorted(ranks)

    def test_configuration_rejects_duplicates(self):
        """Test the model refuses duplicate identifiers."""
        with pytest.raises(ValidationError):
            Configuration(security_level=1, tags=TagSet.of(["generic"]), groups=(BASE_SECURITY[0], BASE_SECURITY[0]))

    def test_configuration_rejects_tier_regression(self):
        """Test the model refuses out of order tiers."""
        with pytest.raises(ValidationError):
            Configuration(
                security_level=2,
                tags=TagSet.of(["generic"]),
                groups=(ENHANCED_SECURITY[0], BASE_SECURITY[0]),
            )


class TestModels:
    """Tests for tool group model validation."""

    def test_local_hook_needs_invocation(self):
        """Test a local hook without entry or detector is rejected."""
        with pytest.raises(ValidationError):
            ToolGroup(identifier="x", display_name="X", source=LOCAL_SOURCE, tier=SecurityTier.BASE)

    def test_remote_source_needs_rev(self):
        """Test remote sources must be pinned."""
        with pytest.raises(ValidationError):
            ToolSource(repo="https://github.com/example/hooks")

    def test_local_source_rejects_rev(self):
        """Test local sources cannot be pinned."""
        with pytest.raises(ValidationError):
            ToolSource(repo="local", rev="v1")

    def test_detector_rejects_quotes(self):
        """Test detector text that would break the shell command."""
        with pytest.raises(ValidationError):
            DetectorSpec(kind=DetectorKind.CONTENT, pattern="it's", banner="X", success_message="ok")

    def test_content_detector_needs_one_matcher(self):
        """Test pattern and code point ranges are exclusive."""
        with pytest.raises(ValidationError):
            DetectorSpec(
                kind=DetectorKind.CONTENT,
                pattern="x",
                codepoint_ranges=((0x1F600, 0x1F64F),),
                banner="X",
                success_message="ok",
            )

    def test_file_name_detector_needs_globs(self):
        """Test file name detectors need include globs."""
        with pytest.raises(ValidationError):
            DetectorSpec(kind=DetectorKind.FILE_NAME, banner="X", success_message="ok")
