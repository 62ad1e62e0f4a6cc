"""Detection data models: raw signals and technology tag sets."""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

GENERIC_TAG = "generic"


class SignalKind(str, Enum):
    """Kind of presence signal observed in a project tree."""

    FILE = "file"
    DIRECTORY = "directory"
    EXTENSION = "extension"
    DEPENDENCY = "dependency"


class Signal(BaseModel):
    """A single observation collected by the scanner."""

    model_config = ConfigDict(frozen=True)

    kind: SignalKind = Field(description="What was observed")
    value: str = Field(description="Marker path, extension or dependency name")
    source_path: str = Field(
        default=".",
        description="Project-relative path the observation came from",
    )

    def sort_key(self) -> tuple[str, str, str]:
        """Return a key giving signals a stable order."""
        return (self.kind.value, self.value, self.source_path)


class TagOrigin(str, Enum):
    """Which signal family first contributed a tag."""

    FILE = "file"
    DIRECTORY = "directory"
    EXTENSION = "extension"
    DEPENDENCY = "dependency"
    FALLBACK = "fallback"


class TagSet(BaseModel):
    """Deduplicated set of technology tags."""

    model_config = ConfigDict(frozen=True)

    tags: frozenset[str] = Field(default_factory=frozenset)
    origins: dict[str, TagOrigin] = Field(default_factory=dict)

    @classmethod
    def of(cls, tags: Iterable[str], origin: TagOrigin = TagOrigin.FILE) -> "TagSet":
        """Build a tag set from plain tag names.

        Args:
            tags: Tag names.
            origin: Origin recorded for every tag.

        Returns:
            New TagSet.
        """
        unique = frozenset(tags)
        return cls(tags=unique, origins={tag: origin for tag in unique})

    def has(self, tag: str) -> bool:
        """Return True if the tag is present."""
        return tag in self.tags

    def has_any(self, tags: Iterable[str]) -> bool:
        """Return True if any of the given tags is present."""
        return any(tag in self.tags for tag in tags)

    def sorted(self) -> list[str]:
        """Return tags in lexical order."""
        return sorted(self.tags)

    def origin_of(self, tag: str) -> TagOrigin | None:
        """Return the origin recorded for a tag."""
        return self.origins.get(tag)

    @property
    def is_generic(self) -> bool:
        """True when nothing specific was recognized."""
        return self.tags == {GENERIC_TAG}

    def __len__(self) -> int:
        return len(self.tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags
