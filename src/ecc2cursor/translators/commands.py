"""Commands -> full workflow skills plus thin command wrappers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..frontmatter import compose_document, extract_title, resolve_description
from ..models import Category, TargetDocument
from .base import INDEX_FILE, Translator

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ..naming import NamingPolicy

POINTER_TEMPLATE = (
    "For the full workflow, read and follow the skill at\n"
    "~/.cursor/skills/{skill_name}/" + INDEX_FILE
)


def render_wrapper(title: str, description: str, skill_name: str) -> str:
    """Command wrapper: title, one-line description and a pointer to the skill."""
    pointer = POINTER_TEMPLATE.format(skill_name=skill_name)
    return f"# {title}\n\n{description}\n\n{pointer}\n"


class CommandTranslator(Translator):
    """Each command fans out into a skill and a wrapper pointing at it."""

    category = Category.COMMANDS
    source_dir = "commands"

    def translate(self, source_dir: Path, policy: NamingPolicy) -> Iterator[TargetDocument]:
        for path in self._markdown_files(source_dir):
            source_path = self._relative(self.source_dir, path.name)
            if self._is_skipped(source_path):
                continue

            doc = self._read_document(path, source_path)
            skill_name = policy.name(doc.stem)
            description = resolve_description(
                self.catalog.command_descriptions.get(source_path),
                doc.header,
                doc.raw,
            )

            body = self._transform(doc.body, policy.prefix, source_path)
            yield TargetDocument(
                path=self._relative("skills", skill_name, INDEX_FILE),
                content=compose_document({"name": skill_name, "description": description}, body),
            )

            title = extract_title(doc.body) or doc.stem.replace("-", " ")
            short = doc.header.get("description") or f"{description.split('.')[0]}."
            yield TargetDocument(
                path=self._relative("commands", f"{skill_name}.md"),
                content=render_wrapper(title, short, skill_name),
            )
