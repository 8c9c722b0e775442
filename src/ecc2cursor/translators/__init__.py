"""Category translators."""

from __future__ import annotations

from ..catalog import Catalog
from ..exceptions import TranslationError
from ..models import Category, LanguageSelection
from .agents import AgentTranslator
from .base import Translator
from .commands import CommandTranslator
from .contexts import ContextTranslator
from .hooks import HookTranslator
from .rules import RulesTranslator
from .skills import SkillTranslator

TRANSLATORS: dict[Category, type[Translator]] = {
    Category.AGENTS: AgentTranslator,
    Category.RULES: RulesTranslator,
    Category.COMMANDS: CommandTranslator,
    Category.SKILLS: SkillTranslator,
    Category.CONTEXTS: ContextTranslator,
    Category.HOOKS: HookTranslator,
}


def get_translator(
    category: Category,
    catalog: Catalog | None = None,
    languages: LanguageSelection = "auto",
) -> Translator:
    """Instantiate the translator for a document category.

    Raises:
        TranslationError: For categories that do not produce documents
    """
    if category not in Category.document_categories():
        msg = f"No document translator for category {category.value!r}"
        raise TranslationError(msg, category=category.value)
    if category is Category.RULES:
        return RulesTranslator(catalog, languages=languages)
    return TRANSLATORS[category](catalog)


__all__ = [
    "TRANSLATORS",
    "AgentTranslator",
    "CommandTranslator",
    "ContextTranslator",
    "HookTranslator",
    "RulesTranslator",
    "SkillTranslator",
    "Translator",
    "get_translator",
]
