"""Composed configuration and derived tool manifest models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stackguard.models.signal import TagSet
from stackguard.models.tool_group import SecurityTier, ToolGroup


class Configuration(BaseModel):
    """Ordered tool groups composed for a tag set and security level."""

    model_config = ConfigDict(frozen=True)

    security_level: int = Field(ge=1, le=3)
    tags: TagSet
    groups: tuple[ToolGroup, ...] = ()
    applied_rules: tuple[str, ...] = Field(
        default=(),
        description="Summaries of the technology rules that matched",
    )

    @model_validator(mode="after")
    def check_invariants(self) -> "Configuration":
        """Identifiers are unique and tiers never go backwards."""
        seen: set[str] = set()
        last_rank = -1
        for group in self.groups:
            if group.identifier in seen:
                raise ValueError(f"duplicate tool identifier: {group.identifier}")
            seen.add(group.identifier)
            if group.tier.rank < last_rank:
                raise ValueError(f"{group.identifier} ({group.tier.value}) is out of tier order")
            last_rank = group.tier.rank
        return self

    @property
    def identifiers(self) -> list[str]:
        """Hook ids in output order."""
        return [group.identifier for group in self.groups]

    def by_tier(self, tier: SecurityTier) -> list[ToolGroup]:
        """Return groups belonging to one tier, in order."""
        return [group for group in self.groups if group.tier == tier]

    def get(self, identifier: str) -> ToolGroup | None:
        """Look up a group by hook id."""
        for group in self.groups:
            if group.identifier == identifier:
                return group
        return None


class ToolManifest(BaseModel):
    """Flat list of installable tool version constraints."""

    model_config = ConfigDict(frozen=True)

    security_level: int = Field(ge=1, le=3)
    requirements: tuple[str, ...] = ()


class RenderedArtifacts(BaseModel):
    """Both generated documents, rendered and ready to write."""

    model_config = ConfigDict(frozen=True)

    config_text: str
    manifest_text: str
    config_file: str = ".pre-commit-config.yaml"
    manifest_file: str = "requirements.dev.assist.txt"

    def files(self) -> list[tuple[str, str]]:
        """(file name, content) pairs in write order."""
        return [(self.config_file, self.config_text), (self.manifest_file, self.manifest_text)]
