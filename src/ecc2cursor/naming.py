"""Install naming: the prefix is both the name decoration and the manifest.

Every installed skill directory, agent file and command file is named
``{prefix}-{base}``. Nothing else records what was installed, so the scanner
and clean pass recognise owned entries purely by that prefix. An empty prefix
selects *untracked* mode: names are left bare and installed content becomes
indistinguishable from user-authored content, so scan and clean do nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .exceptions import NamingError

# No dash: "ecc" must never claim entries installed under "ecc-beta".
_PREFIX_RE = re.compile(r"^[A-Za-z0-9_.]+$")


def prefix_name(prefix: str, name: str) -> str:
    """Build an installed name.

    >>> prefix_name("ecc", "typescript")
    'ecc-typescript'
    >>> prefix_name("", "typescript")
    'typescript'
    """
    return f"{prefix}-{name}" if prefix else name


def validate_prefix(prefix: str) -> str:
    """Check that a prefix can serve as an unambiguous ownership key."""
    if prefix and not _PREFIX_RE.match(prefix):
        msg = f"Invalid prefix {prefix!r}: use letters, digits, '_' or '.' (no '-')"
        raise NamingError(msg, details={"prefix": prefix})
    return prefix


@dataclass(frozen=True)
class NamingPolicy:
    """Maps source base names to installed names and back."""

    prefix: str = ""

    def __post_init__(self) -> None:
        validate_prefix(self.prefix)

    @property
    def tracks_installs(self) -> bool:
        """False in untracked mode, where installed entries cannot be detected."""
        return bool(self.prefix)

    @property
    def mode(self) -> str:
        return "tracked" if self.tracks_installs else "untracked"

    def name(self, base: str) -> str:
        return prefix_name(self.prefix, base)

    def owns(self, entry: str) -> bool:
        """Whether a directory entry was installed under this prefix."""
        return self.tracks_installs and entry.startswith(f"{self.prefix}-")

    def base_name(self, entry: str) -> str | None:
        """Recover the source base name from an owned entry, minus any ``.md``."""
        if not self.owns(entry):
            return None
        base = entry[len(self.prefix) + 1 :]
        return base[:-3] if base.endswith(".md") else base


_UNSAFE_NAME_RE = re.compile(r"[/\\]|\.\.")


def is_safe_name(name: str) -> bool:
    """Whether a source-provided name can be used as a single path component."""
    return bool(name) and not _UNSAFE_NAME_RE.search(name)
