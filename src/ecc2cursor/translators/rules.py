"""Rules -> one skill per language, bundling rule files behind an index."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from ..frontmatter import build_frontmatter, extract_title
from ..models import Category, LanguageSelection, TargetDocument
from .base import INDEX_FILE, Translator

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..catalog import Catalog
    from ..naming import NamingPolicy

logger = logging.getLogger(__name__)

COMMON_LANGUAGE = "common"
COMMON_SKILL = "coding-standards"
README = "README.md"
SUMMARY_LENGTH = 120

ATTRIBUTION = (
    "Guidelines imported from "
    "[Everything Claude Code](https://github.com/affaan-m/everything-claude-code)."
)


def discover_languages(rules_dir: Path) -> list[str]:
    """List language subdirectories, ignoring dotfiles."""
    if not rules_dir.is_dir():
        return []
    return sorted(
        entry.name
        for entry in rules_dir.iterdir()
        if entry.is_dir() and not entry.name.startswith(".") and entry.name != README
    )


def rule_skill_base(language: str) -> str:
    """Base skill name for a language directory."""
    return COMMON_SKILL if language == COMMON_LANGUAGE else language


def language_label(language: str) -> str:
    if language == COMMON_LANGUAGE:
        return "General"
    return language[:1].upper() + language[1:]


def _summary(content: str, title: str) -> str:
    body = re.sub(r"\A#.*\n+", "", content, count=1)
    first = body.split("\n\n")[0].strip()[:SUMMARY_LENGTH]
    first = " ".join(first.split()).replace("|", "\\|")
    return first or title


class RulesTranslator(Translator):
    """Bundles ``rules/<language>/*.md`` into ``skills/<name>/rules/``."""

    category = Category.RULES
    source_dir = "rules"

    def __init__(
        self,
        catalog: Catalog | None = None,
        languages: LanguageSelection = "auto",
    ) -> None:
        super().__init__(catalog)
        self.languages = languages

    def _selected_languages(self, source_dir: Path) -> list[str]:
        if self.languages == "auto":
            return discover_languages(source_dir)
        selected = []
        for language in self.languages:
            if "/" in language or "\\" in language or language.startswith("."):
                logger.warning("Ignoring invalid language name %r", language)
                continue
            selected.append(language)
        return selected

    def translate(self, source_dir: Path, policy: NamingPolicy) -> Iterator[TargetDocument]:
        for language in self._selected_languages(source_dir):
            language_dir = source_dir / language
            if not language_dir.is_dir():
                logger.debug("No rules for language %s", language)
                continue

            files = [p for p in self._markdown_files(language_dir) if p.name != README]
            if not files:
                continue

            skill_name = policy.name(rule_skill_base(language))
            entries: list[tuple[str, str, str]] = []

            for path in files:
                source_path = self._relative(self.source_dir, language, path.name)
                if self._is_skipped(source_path):
                    continue

                raw = self._read_text(path)
                transformed = self._transform(raw, policy.prefix, source_path)
                title = extract_title(transformed) or path.stem
                entries.append((path.name, title, _summary(transformed, title)))

                yield TargetDocument(
                    path=self._relative("skills", skill_name, "rules", path.name),
                    content=transformed,
                )

            yield TargetDocument(
                path=self._relative("skills", skill_name, INDEX_FILE),
                content=self.render_index(skill_name, language, entries),
            )

    def describe(self, language: str) -> str:
        """Index description for a language, using the glob table."""
        if language == COMMON_LANGUAGE:
            return (
                "Coding standards, quality practices, security guidelines, testing "
                "requirements, git workflow, and development patterns. Use when writing, "
                "reviewing, modifying, planning, or committing any code."
            )
        label = language_label(language)
        globs = self.catalog.language_globs.get(language)
        scope = f" ({globs})" if globs else ""
        return f"{label} coding standards and best practices. Use when working with {label} files{scope}."

    def render_index(
        self,
        skill_name: str,
        language: str,
        entries: list[tuple[str, str, str]],
    ) -> str:
        """Build the SKILL.md index for one language bundle."""
        header = build_frontmatter({"name": skill_name, "description": self.describe(language)})
        rows = "\n".join(
            f"| {title} | {summary} | [{filename}](rules/{filename}) |"
            for filename, title, summary in entries
        )
        sections = [
            header,
            "",
            f"# {language_label(language)} Coding Standards",
            "",
            ATTRIBUTION,
            "",
            "## Rules",
            "",
            "| Topic | Summary | Details |",
            "|-------|---------|---------|",
        ]
        if rows:
            sections.append(rows)
        sections.extend([
            "",
            "Read individual rule files for detailed guidelines and examples.",
            "",
        ])
        return "\n".join(sections)
