"""Tool group models: one security or quality hook per record."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

LOCAL_REPO = "local"

# Quotes and expansion characters would break out of the rendered command
_UNSAFE_CHARS = frozenset("'\"`$")


class SecurityTier(str, Enum):
    """Composition tier of a tool group, in output order."""

    BASE = "base"
    ENHANCED = "enhanced"
    MAXIMUM = "maximum"
    TECHNOLOGY = "technology"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        """Position of this tier in the composed configuration."""
        return list(SecurityTier).index(self)


class DetectorKind(str, Enum):
    """What a native detector command looks for."""

    CONTENT = "content"
    FILE_NAME = "file_name"
    PACKAGE_AUDIT = "package_audit"


class DetectorSpec(BaseModel):
    """Platform-independent definition of a native detector command.

    The matching rules live here once; a command dialect turns them into a
    shell command for the target platform.
    """

    model_config = ConfigDict(frozen=True)

    kind: DetectorKind
    pattern: str | None = Field(
        default=None,
        description="Extended regular expression matched against file content",
    )
    codepoint_ranges: tuple[tuple[int, int], ...] = Field(
        default=(),
        description="Inclusive Unicode code point ranges matched against file content",
    )
    case_insensitive: bool = False
    include_globs: tuple[str, ...] = Field(
        default=(),
        description="File name globs to scan (content) or report (file name); empty means all files",
    )
    exclude_globs: tuple[str, ...] = Field(
        default=(),
        description="File name globs never scanned",
    )
    audits: tuple[tuple[str, str], ...] = Field(
        default=(),
        description="(manifest file, audit command) pairs run when the manifest exists",
    )
    banner: str = Field(default="", description="Heading printed around findings")
    success_message: str

    @model_validator(mode="after")
    def check_matcher(self) -> "DetectorSpec":
        """Each kind carries the fields it needs, all safe to embed in a quoted command."""
        texts = [self.pattern or "", self.banner, self.success_message, *self.include_globs, *self.exclude_globs]
        texts.extend(part for audit in self.audits for part in audit)
        for text in texts:
            if _UNSAFE_CHARS.intersection(text) or "\\\\" in text:
                raise ValueError(f"detector text cannot be embedded in a shell command: {text!r}")

        if self.kind == DetectorKind.PACKAGE_AUDIT and not self.audits:
            raise ValueError("package audit detector needs audits")
        if self.kind == DetectorKind.CONTENT:
            if bool(self.pattern) == bool(self.codepoint_ranges):
                raise ValueError("content detector needs exactly one of pattern or codepoint_ranges")
            if not self.banner:
                raise ValueError("content detector needs a banner")
        if self.kind == DetectorKind.FILE_NAME and not self.include_globs:
            raise ValueError("file name detector needs include_globs")
        return self


class ToolSource(BaseModel):
    """Where the hook implementation comes from."""

    model_config = ConfigDict(frozen=True)

    repo: str = Field(description="Repository URL or 'local'")
    rev: str | None = Field(default=None, description="Pinned revision")

    @property
    def is_local(self) -> bool:
        """True for hooks defined in the project itself."""
        return self.repo == LOCAL_REPO

    @model_validator(mode="after")
    def check_rev(self) -> "ToolSource":
        """Remote sources must be pinned, local ones must not."""
        if self.is_local and self.rev is not None:
            raise ValueError("local tool source cannot carry a revision")
        if not self.is_local and not self.rev:
            raise ValueError(f"remote tool source {self.repo} needs a revision")
        return self


LOCAL_SOURCE = ToolSource(repo=LOCAL_REPO)


class ToolGroup(BaseModel):
    """One hook entry of the generated pipeline."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Hook id, unique within a configuration")
    display_name: str
    source: ToolSource
    tier: SecurityTier
    required_security_level: int = Field(default=1, ge=1, le=3)
    entry: str | None = Field(default=None, description="Static command line")
    detector: DetectorSpec | None = Field(
        default=None,
        description="Native detector rendered per platform",
    )
    language: str | None = None
    files: str | None = Field(default=None, description="Regex of files the hook applies to")
    exclude: str | None = Field(default=None, description="Regex of files the hook skips")
    args: tuple[str, ...] = ()
    language_version: str | None = None
    pass_filenames: bool | None = None

    @model_validator(mode="after")
    def check_invocation(self) -> "ToolGroup":
        """A hook has at most one of entry and detector; local hooks need one."""
        if self.entry and self.detector:
            raise ValueError(f"{self.identifier}: entry and detector are exclusive")
        if self.source.is_local and not (self.entry or self.detector):
            raise ValueError(f"{self.identifier}: local hook needs an entry or detector")
        return self

    @property
    def is_native(self) -> bool:
        """True when the entry is a platform-rendered detector command."""
        return self.detector is not None
