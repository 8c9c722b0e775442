"""Agents -> subagent definitions (``agents/<name>.md``)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..frontmatter import compose_document
from ..models import Category, TargetDocument
from ..naming import is_safe_name
from .base import Translator

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ..naming import NamingPolicy

logger = logging.getLogger(__name__)


class AgentTranslator(Translator):
    """One target agent per source agent, with the header rebuilt."""

    category = Category.AGENTS
    source_dir = "agents"

    def translate(self, source_dir: Path, policy: NamingPolicy) -> Iterator[TargetDocument]:
        for path in self._markdown_files(source_dir):
            source_path = self._relative(self.source_dir, path.name)
            if self._is_skipped(source_path):
                continue

            doc = self._read_document(path, source_path)
            base = doc.header.get("name") or doc.stem
            if not is_safe_name(base):
                logger.warning("Ignoring unsafe agent name %r in %s", base, source_path)
                base = doc.stem

            name = policy.name(base)
            description = (
                self.catalog.agent_descriptions.get(path.name)
                or doc.header.get("description")
                or ""
            )

            body = self._transform(doc.body, policy.prefix, source_path)
            yield TargetDocument(
                path=self._relative("agents", f"{name}.md"),
                content=compose_document({"name": name, "description": description}, body),
            )
