"""Content rewrite pipeline for adapting source documents to the target tool.

Rules run in a fixed order. Prefix-aware path rules come before the generic
``~/.claude/`` substitution, because once the root is rewritten the more
specific patterns can no longer see it. No rule's pattern matches its own
output, so running the pipeline twice gives the same text as running it once.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Replacement = str | Callable[[re.Match[str]], str]

# Commands referenced as `/name` in backticks.
QUOTED_COMMANDS = (
    "plan",
    "tdd",
    "code-review",
    "build-fix",
    "e2e",
    "refactor-clean",
    "learn",
    "checkpoint",
    "verify",
    "go-review",
    "go-test",
    "go-build",
)

# Commands referenced bare in prose, e.g. "run /plan first".
BARE_COMMANDS = (
    "plan",
    "tdd",
    "code-review",
    "build-and-fix",
    "build-fix",
    "e2e",
    "refactor-clean",
    "go-review",
    "go-test",
    "go-build",
)


@dataclass(frozen=True)
class TransformRule:
    """A compiled pattern and its replacement, applied globally."""

    pattern: re.Pattern[str]
    replace: Replacement
    name: str = ""

    @classmethod
    def compile(
        cls,
        pattern: str,
        replace: Replacement,
        name: str = "",
        flags: int = 0,
    ) -> TransformRule:
        return cls(re.compile(pattern, flags), replace, name or pattern)

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replace, text)


STATIC_RULES: tuple[TransformRule, ...] = (
    TransformRule.compile(r"~/\.claude/", "~/.cursor/", "path-root"),
    TransformRule.compile(r"CLAUDE\.md", "project configuration", "claude-md"),
    TransformRule.compile(r"Claude Code CLI", "Cursor", "product-cli"),
    TransformRule.compile(r"Claude Code", "Cursor", "product"),
    TransformRule.compile(r"\bBash tool\b", "Shell tool", "bash-tool"),
    TransformRule.compile(r'"Bash"', '"Shell"', "bash-name"),
    TransformRule.compile(r'"Edit"', '"StrReplace"', "edit-name"),
)


def _alternation(names: Sequence[str]) -> str:
    return "|".join(re.escape(n) for n in names)


def build_rules(prefix: str) -> list[TransformRule]:
    """Build the full ordered pipeline for a prefix.

    Replacements are callables so the prefix is inserted literally and never
    read as a group reference.
    """
    p = f"{prefix}-" if prefix else ""

    return [
        TransformRule.compile(
            r"~/\.claude/agents/([\w-]+)\.md",
            lambda m: f"~/.cursor/agents/{p}{m.group(1)}.md",
            "agent-path",
        ),
        TransformRule.compile(
            r"~/\.claude/skills/([\w-]+)/",
            lambda m: f"~/.cursor/skills/{p}{m.group(1)}/",
            "skill-path",
        ),
        TransformRule.compile(
            r"[Uu]se (?:the )?\*\*(\w[\w-]*)\*\* agent",
            lambda m: f"Follow the **{p}{m.group(1)}** skill",
            "use-agent",
        ),
        TransformRule.compile(
            r"invokes the `(\w[\w-]*)` agent",
            lambda m: f"invokes the `{p}{m.group(1)}` skill",
            "invokes-agent",
        ),
        TransformRule.compile(
            r"`(\w[\w-]*)` agent",
            lambda m: f"`{p}{m.group(1)}` skill",
            "quoted-agent",
        ),
        TransformRule.compile(
            rf"`/({_alternation(QUOTED_COMMANDS)})`(?: command)?",
            lambda m: f"`/{p}{m.group(1)}` command",
            "quoted-command",
        ),
        TransformRule.compile(
            rf"/({_alternation(BARE_COMMANDS)})(?=[\s,.)])",
            lambda m: f"/{p}{m.group(1)}",
            "bare-command",
        ),
        *STATIC_RULES,
    ]


def apply_rules(content: str, rules: Sequence[TransformRule]) -> str:
    """Apply each rule once, in order, to the progressively rewritten text."""
    for rule in rules:
        content = rule.apply(content)
    return content


def remove_sections(content: str, patterns: Sequence[re.Pattern[str]]) -> str:
    """Delete the first match of each pattern, in order."""
    for pattern in patterns:
        content = pattern.sub("", content, count=1)
    return content


def collapse_blank_lines(content: str) -> str:
    return re.sub(r"\n{3,}", "\n\n", content)


def transform_content(
    content: str,
    prefix: str,
    source_path: str | None = None,
    strip_sections: Mapping[str, Sequence[re.Pattern[str]]] | None = None,
) -> str:
    """Adapt a source document body for the target tool.

    Args:
        content: Document text (usually the body, without its header)
        prefix: Install prefix, may be empty
        source_path: POSIX path relative to the source root; selects which
            sections are stripped before rewriting
        strip_sections: Section strip table; defaults to the bundled catalog

    Returns:
        Rewritten text
    """
    if source_path:
        if strip_sections is None:
            from .catalog import default_catalog

            strip_sections = default_catalog().strip_patterns
        patterns = strip_sections.get(source_path)
        if patterns:
            logger.debug("Stripping %d section(s) from %s", len(patterns), source_path)
            content = remove_sections(content, patterns)

    content = apply_rules(content, build_rules(prefix))
    return collapse_blank_lines(content)
