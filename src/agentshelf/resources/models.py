"""
Resource models for agentshelf.

Defines the entries discovered for each resource kind (skills, commands,
agents, plugins), their on-demand detail views, and the scan diagnostics.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SkillLocation(str, Enum):
    """Where a skill was discovered, in precedence order."""

    USER = "user"
    PROJECT = "project"
    MANAGED = "managed"


class ResourceModel(BaseModel):
    """Base for all entries: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the request bridge."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Skills
# =============================================================================


class SkillEntry(ResourceModel):
    """A skill directory that holds a skill.json descriptor."""

    name: str = Field(..., description="Skill directory name")
    location: SkillLocation
    path: Path = Field(..., description="Absolute path to the skill directory")
    description: str | None = None
    source_plugin: str | None = Field(
        default=None,
        description="Plugin directory name for managed skills",
    )
    has_readme: bool = False
    has_prompt: bool = False


class SkillDetails(SkillEntry):
    """A skill plus the contents of its files, read on demand."""

    skill_json: dict[str, Any] | None = None
    readme_content: str | None = None
    prompt_content: str | None = None


# =============================================================================
# Commands & Agents
# =============================================================================


class MarkdownEntry(ResourceModel):
    """A single-file resource: <root>/<name>.md."""

    name: str
    path: Path = Field(..., description="Absolute path to the .md file")
    description: str | None = None
    has_readme: bool = False


class CommandEntry(MarkdownEntry):
    """A slash command from ~/.claude/commands."""


class AgentEntry(MarkdownEntry):
    """A sub-agent definition from ~/.claude/agents."""


class MarkdownDetails(MarkdownEntry):
    """A command or agent plus its file contents."""

    content: str | None = None
    readme_content: str | None = None


class CommandDetails(MarkdownDetails):
    pass


class AgentDetails(MarkdownDetails):
    pass


# =============================================================================
# Plugins
# =============================================================================


class PluginEntry(ResourceModel):
    """An installed plugin as reported by the plugin registry."""

    id: str = Field(..., description="plugin@marketplace")
    name: str
    marketplace: str
    path: Path
    version: str | None = None
    description: str | None = None


class PluginStatusEntry(PluginEntry):
    """A plugin with its current enable state."""

    enabled: bool = True


class PluginDetails(PluginEntry):
    """A plugin plus its manifest and README."""

    manifest: dict[str, Any] | None = None
    readme_content: str | None = None


# =============================================================================
# Scan results
# =============================================================================


class DiagnosticKind(str, Enum):
    """Why an entry was skipped during a scan."""

    PARSE_ERROR = "parse_error"
    READ_ERROR = "read_error"
    INVALID_DESCRIPTOR = "invalid_descriptor"
    DIRECTORY_ERROR = "directory_error"


@dataclass(frozen=True)
class ScanDiagnostic:
    """One skipped entry and the reason it was skipped."""

    path: Path
    kind: DiagnosticKind
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.kind.value}: {self.reason}"


EntryT = TypeVar("EntryT", bound=ResourceModel)


@dataclass
class ScanResult(Generic[EntryT]):
    """Entries produced by a scan, with diagnostics for what was skipped."""

    entries: list[EntryT] = field(default_factory=list)
    diagnostics: list[ScanDiagnostic] = field(default_factory=list)

    def extend(self, other: "ScanResult[EntryT]") -> None:
        """Append another result, preserving order."""
        self.entries.extend(other.entries)
        self.diagnostics.extend(other.diagnostics)
