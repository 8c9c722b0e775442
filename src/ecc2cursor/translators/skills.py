"""Skills -> skills, close to a pass-through."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..frontmatter import compose_document
from ..models import Category, TargetDocument
from .base import INDEX_FILE, Translator

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ..naming import NamingPolicy


class SkillTranslator(Translator):
    """Copies skill directories, rebuilding the index header.

    Markdown files in nested subdirectories keep their relative layout and are
    rewritten without a header rebuild. Loose files next to the index are not
    copied.
    """

    category = Category.SKILLS
    source_dir = "skills"

    def translate(self, source_dir: Path, policy: NamingPolicy) -> Iterator[TargetDocument]:
        for skill_dir in sorted(p for p in source_dir.iterdir() if p.is_dir()):
            if self._is_skipped(self._relative(self.source_dir, skill_dir.name)):
                continue

            index = skill_dir / INDEX_FILE
            if not index.is_file():
                continue

            skill_name = policy.name(skill_dir.name)
            source_path = self._relative(self.source_dir, skill_dir.name, INDEX_FILE)
            doc = self._read_document(index, source_path)
            description = doc.header.get("description") or f"Imported skill: {skill_dir.name}"

            body = self._transform(doc.body, policy.prefix, source_path)
            yield TargetDocument(
                path=self._relative("skills", skill_name, INDEX_FILE),
                content=compose_document({"name": skill_name, "description": description}, body),
            )

            for sub_dir in sorted(p for p in skill_dir.iterdir() if p.is_dir()):
                for path in sorted(sub_dir.rglob("*.md")):
                    if not path.is_file():
                        continue
                    relative = path.relative_to(skill_dir).as_posix()
                    content = self._transform(self._read_text(path), policy.prefix)
                    yield TargetDocument(
                        path=self._relative("skills", skill_name, relative),
                        content=content,
                    )
