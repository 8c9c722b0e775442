"""Core data models for the ecc2cursor translation engine."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

McpSelection = Union[Literal["none", "all"], list[str]]
LanguageSelection = Union[Literal["auto"], list[str]]


class Category(str, Enum):
    """Translation categories, in the order a sync runs them."""

    AGENTS = "agents"
    RULES = "rules"
    COMMANDS = "commands"
    SKILLS = "skills"
    CONTEXTS = "contexts"
    HOOKS = "hooks"
    MCP = "mcp"

    @classmethod
    def document_categories(cls) -> list[Category]:
        """Categories that produce markdown documents (everything but MCP)."""
        return [c for c in cls if c is not cls.MCP]


class TargetContext(BaseModel):
    """Where target configuration lives (e.g. ``~/.cursor`` or ``./.cursor``)."""

    model_config = ConfigDict(frozen=True)

    cursor_dir: Path = Field(..., description="Root of the target configuration tree")

    @classmethod
    def from_root(cls, cursor_dir: Path | str) -> TargetContext:
        """Build a context from a target root directory."""
        return cls(cursor_dir=Path(cursor_dir).expanduser())

    @property
    def skills_dir(self) -> Path:
        return self.cursor_dir / "skills"

    @property
    def agents_dir(self) -> Path:
        return self.cursor_dir / "agents"

    @property
    def commands_dir(self) -> Path:
        return self.cursor_dir / "commands"

    @property
    def mcp_file(self) -> Path:
        return self.cursor_dir / "mcp.json"


class SourceDocument(BaseModel):
    """A source markdown document split into header and body."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path relative to the source root")
    raw: str = Field(..., description="Unmodified file content")
    header: dict[str, str] = Field(default_factory=dict)
    body: str = Field(default="")

    @property
    def stem(self) -> str:
        """File name without the ``.md`` suffix."""
        return Path(self.path).stem


class TargetDocument(BaseModel):
    """A document produced by a translator, relative to the target root."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="POSIX path relative to the target root")
    content: str = Field(..., description="Final payload")


class AvailableServer(BaseModel):
    """An installable (credential-free) service definition from the source tree."""

    name: str = Field(..., description="Unique server name")
    description: str = Field(default="", description="Free-text description")
    config: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw definition: command, args, env and any extra keys",
    )


class McpResult(BaseModel):
    """Outcome of merging servers into the target registry."""

    added: int = 0
    skipped: int = 0
    selection: McpSelection = "none"


class ScanResult(BaseModel):
    """Prefixed entries found in one target root."""

    cursor_dir: Path
    skills: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.skills) + len(self.agents) + len(self.commands)


class CleanResult(BaseModel):
    """Entries removed by a clean pass."""

    skills: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)

    @property
    def total_removed(self) -> int:
        return len(self.skills) + len(self.agents) + len(self.commands)


class SyncOptions(BaseModel):
    """Everything a full sync needs besides the catalog."""

    ctx: TargetContext
    prefix: str = ""
    categories: list[Category] = Field(default_factory=lambda: list(Category))
    languages: LanguageSelection = "auto"
    mcp_selection: McpSelection = "all"
    dry_run: bool = False
    source_path: Path | None = Field(
        default=None,
        description="Local source tree; when unset the repository is cloned",
    )
    repository: str = ""
    branch: str = "main"


class SyncResult(BaseModel):
    """Per-category counts of a translation pass."""

    sha: str | None = None
    counts: dict[str, int] = Field(
        default_factory=lambda: {c.value: 0 for c in Category},
    )
    mcp_selection: McpSelection = "none"

    @property
    def total_files(self) -> int:
        return sum(self.counts.values())
