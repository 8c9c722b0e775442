"""Contexts -> ``ctx-`` skills."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..frontmatter import compose_document, resolve_description
from ..models import Category, TargetDocument
from .base import INDEX_FILE, Translator

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ..naming import NamingPolicy

CONTEXT_PREFIX = "ctx-"


class ContextTranslator(Translator):
    category = Category.CONTEXTS
    source_dir = "contexts"

    def translate(self, source_dir: Path, policy: NamingPolicy) -> Iterator[TargetDocument]:
        for path in self._markdown_files(source_dir):
            source_path = self._relative(self.source_dir, path.name)
            if self._is_skipped(source_path):
                continue

            doc = self._read_document(path, source_path)
            skill_name = policy.name(f"{CONTEXT_PREFIX}{doc.stem}")
            description = resolve_description(None, doc.header, doc.raw)

            body = self._transform(doc.body, policy.prefix, source_path)
            yield TargetDocument(
                path=self._relative("skills", skill_name, INDEX_FILE),
                content=compose_document({"name": skill_name, "description": description}, body),
            )
