"""Curated catalog loader with schema validation.

The catalog holds every hand-maintained table the translators consult: the
deny-set of source paths, section strips, description overrides, language
globs, the credential denylist for services and the static hook guidelines.
Keeping it as versioned data means the engine itself stays free of curated
content.
"""

from __future__ import annotations

import json
import re
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import CatalogError

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.yaml"
SCHEMA_PATH = DATA_DIR / "schemas" / "catalog.schema.json"

STRIP_FLAGS = re.MULTILINE | re.DOTALL


class CatalogDefaults(BaseModel):
    """Fallback values for settings not given on the command line or environment."""

    repository: str = Field(
        default="https://github.com/affaan-m/everything-claude-code.git",
        description="Source repository to clone",
    )
    branch: str = Field(default="main", description="Branch to clone")
    prefix: str = Field(default="ecc", description="Install prefix")
    target_dir: str = Field(default="~/.cursor", description="Default target root")


class HookGuideline(BaseModel):
    """A static guideline document written when the source ships hooks."""

    filename: str = Field(..., description="Target file name under rules/")
    title: str = Field(..., description="Guideline title")
    source: str = Field(..., description="Path of the body, relative to the catalog")
    content: str = Field(default="", description="Loaded document text")


class Catalog(BaseModel):
    """Validated curated data tables."""

    version: str = Field(..., description="Semantic version of the catalog")
    defaults: CatalogDefaults = Field(default_factory=CatalogDefaults)
    skip_paths: list[str] = Field(default_factory=list)
    strip_sections: dict[str, list[str]] = Field(default_factory=dict)
    agent_descriptions: dict[str, str] = Field(default_factory=dict)
    command_descriptions: dict[str, str] = Field(default_factory=dict)
    language_globs: dict[str, str] = Field(default_factory=dict)
    token_required_servers: list[str] = Field(default_factory=list)
    command_aliases: dict[str, str] = Field(default_factory=dict)
    hook_guidelines: list[HookGuideline] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_semver(cls, v: str) -> str:
        """Validate version follows semantic versioning."""
        semver_pattern = r"^\d+\.\d+\.\d+(?:-[a-zA-Z0-9\-]+)?(?:\+[a-zA-Z0-9\-]+)?$"
        if not re.match(semver_pattern, v):
            msg = "Version must follow semantic versioning (e.g., 1.0.0)"
            raise ValueError(msg)
        return v

    @field_validator("strip_sections")
    @classmethod
    def validate_strip_patterns(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Reject patterns that do not compile."""
        for path, patterns in v.items():
            for pattern in patterns:
                try:
                    re.compile(pattern, STRIP_FLAGS)
                except re.error as e:
                    msg = f"Invalid strip pattern for {path}: {e}"
                    raise ValueError(msg) from e
        return v

    @cached_property
    def skip_set(self) -> frozenset[str]:
        return frozenset(self.skip_paths)

    @cached_property
    def strip_patterns(self) -> dict[str, list[re.Pattern[str]]]:
        """Compiled section strips keyed by source path."""
        return {
            path: [re.compile(p, STRIP_FLAGS) for p in patterns]
            for path, patterns in self.strip_sections.items()
        }

    @cached_property
    def token_required_set(self) -> frozenset[str]:
        return frozenset(self.token_required_servers)

    def is_skipped(self, source_path: str) -> bool:
        """Whether a source path is on the deny-set."""
        return source_path in self.skip_set


class CatalogLoader:
    """Loads and validates a catalog file and the guideline documents it lists."""

    def __init__(self, catalog_path: Path | None = None) -> None:
        """Initialize loader.

        Args:
            catalog_path: Path to a catalog YAML file, defaults to the bundled one
        """
        self.path = Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH
        self.root = self.path.parent
        self._schema: dict[str, Any] | None = None

    def _load_schema(self) -> dict[str, Any]:
        if self._schema is None:
            try:
                with SCHEMA_PATH.open(encoding="utf-8") as f:
                    self._schema = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                msg = f"Failed to load catalog schema: {e}"
                raise CatalogError(msg) from e
        return self._schema

    def _validate_against_schema(self, data: Any) -> None:
        try:
            jsonschema.validate(data, self._load_schema())
        except jsonschema.ValidationError as e:
            msg = f"Catalog schema validation failed: {e.message}"
            raise CatalogError(
                msg,
                details={"path": list(e.absolute_path), "catalog": str(self.path)},
            ) from e

    def _read_guideline(self, guideline: HookGuideline) -> HookGuideline:
        source = self.root / guideline.source
        try:
            content = source.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Failed to read hook guideline {guideline.filename}: {e}"
            raise CatalogError(msg, details={"source": str(source)}) from e
        return guideline.model_copy(update={"content": content})

    def load(self, validate: bool = True) -> Catalog:
        """Load the catalog.

        Args:
            validate: Whether to perform schema validation

        Returns:
            Validated catalog with guideline contents loaded

        Raises:
            CatalogError: If the catalog cannot be read or is invalid
        """
        if not self.path.exists():
            msg = f"Catalog file not found: {self.path}"
            raise CatalogError(msg)

        try:
            with self.path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Failed to parse catalog YAML: {e}"
            raise CatalogError(msg) from e
        except OSError as e:
            msg = f"Failed to read catalog file: {e}"
            raise CatalogError(msg) from e

        if validate:
            self._validate_against_schema(data)

        try:
            catalog = Catalog.model_validate(data)
        except ValidationError as e:
            msg = f"Catalog validation failed: {e}"
            raise CatalogError(msg) from e

        catalog.hook_guidelines = [self._read_guideline(g) for g in catalog.hook_guidelines]
        return catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """The bundled catalog, loaded once per process."""
    return CatalogLoader().load()


def load_catalog(catalog_path: Path | None = None) -> Catalog:
    """Load a catalog file, or the bundled one when no path is given."""
    if catalog_path is None:
        return default_catalog()
    return CatalogLoader(catalog_path).load()
