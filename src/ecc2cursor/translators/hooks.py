"""Hooks -> static coding-standard guidelines.

Hooks describe imperative automation the target tool has no equivalent for,
so only their intent is carried over, as the curated guideline documents in
the catalog. The hook configuration is never parsed: its presence is the only
input, and changing its content does not change the output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Category, TargetDocument
from .base import Translator
from .rules import COMMON_SKILL

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ..naming import NamingPolicy

HOOKS_FILE = "hooks.json"


class HookTranslator(Translator):
    category = Category.HOOKS
    source_dir = "hooks"

    def translate(self, source_dir: Path, policy: NamingPolicy) -> Iterator[TargetDocument]:
        if not (source_dir / HOOKS_FILE).is_file():
            return

        skill_name = policy.name(COMMON_SKILL)
        for guideline in self.catalog.hook_guidelines:
            yield TargetDocument(
                path=self._relative("skills", skill_name, "rules", guideline.filename),
                content=guideline.content,
            )
