"""Header codec for markdown documents.

Headers use a restricted, single-level ``key: value`` subset delimited by
``---`` lines. This is not a YAML parser: nested structures, lists and block
scalars are not recognised, and the target side cannot read block scalars
either, so ``build_frontmatter`` always emits single-line values.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

GENERIC_DESCRIPTION = "Imported from Everything Claude Code"
MAX_DESCRIPTION_LENGTH = 200

_FRONTMATTER_RE = re.compile(r"---\s*\n(.*?)\n---\s*\n?(.*)\Z", re.DOTALL)
_FIELD_RE = re.compile(r"^(\w[\w-]*):\s*(.*)$")
_LEADING_FRONTMATTER_RE = re.compile(r"\A---.*?---\s*\n?", re.DOTALL)
_TITLE_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_FIRST_PARAGRAPH_RE = re.compile(r"^#.*\n+([^#\n][^\n]+)", re.MULTILINE)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def parse_frontmatter(content: str) -> tuple[dict[str, str], str]:
    """Split a document into its header fields and body.

    Args:
        content: Full document text

    Returns:
        Tuple of (header fields, body). When no delimited header is present
        the header is empty and the body is the whole input.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}, content

    header: dict[str, str] = {}
    for line in match.group(1).split("\n"):
        field = _FIELD_RE.match(line)
        if field:
            header[field.group(1)] = _unquote(field.group(2).strip())

    return header, match.group(2)


def build_frontmatter(fields: Mapping[str, str | bool]) -> str:
    """Serialize header fields into a delimited block.

    Values wrapped in a matching quote pair are quoted once more, so that
    ``parse_frontmatter`` gives them back unchanged.

    Args:
        fields: Header fields in output order

    Returns:
        Header block without a trailing newline
    """
    lines = ["---"]
    for key, value in fields.items():
        if isinstance(value, bool):
            lines.append(f"{key}: {'true' if value else 'false'}")
        else:
            flat = re.sub(r"\n+", " ", value).strip()
            if _unquote(flat) != flat:
                # Parsing strips one matching quote pair, so add one back.
                quote = "'" if flat[0] == '"' else '"'
                flat = f"{quote}{flat}{quote}"
            lines.append(f"{key}: {flat}")
    lines.append("---")
    return "\n".join(lines)


def compose_document(fields: Mapping[str, str | bool], body: str) -> str:
    """Join a rebuilt header and a body with one blank line between them."""
    return f"{build_frontmatter(fields)}\n\n{body.lstrip()}"


def extract_title(content: str) -> str:
    """Return the text of the first level-one heading, or an empty string."""
    match = _TITLE_RE.search(content)
    return match.group(1).strip() if match else ""


def infer_description(content: str, fallback: str = GENERIC_DESCRIPTION) -> str:
    """Infer a one-line description from the first paragraph after a heading."""
    body = _LEADING_FRONTMATTER_RE.sub("", content, count=1)
    match = _FIRST_PARAGRAPH_RE.search(body)
    if match:
        description = match.group(1).strip()
        if len(description) > MAX_DESCRIPTION_LENGTH:
            description = f"{description[:MAX_DESCRIPTION_LENGTH - 3]}..."
        return description
    return extract_title(content) or fallback


def resolve_description(
    override: str | None,
    header: Mapping[str, str],
    content: str,
) -> str:
    """Pick a description: override, header field, inferred text, then fallbacks."""
    if override:
        return override
    if header.get("description"):
        return header["description"]
    return infer_description(content)
