"""Base class shared by the category translators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, ClassVar

from ..catalog import Catalog, default_catalog
from ..exceptions import TranslationError
from ..frontmatter import parse_frontmatter
from ..models import Category, SourceDocument, TargetContext, TargetDocument
from ..naming import NamingPolicy
from ..transform import transform_content

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

INDEX_FILE = "SKILL.md"


class Translator(ABC):
    """Turns one source subtree into target documents.

    Subclasses implement ``translate`` as a generator of ``TargetDocument``;
    ``run`` handles the missing-directory case, writing and error wrapping.
    """

    category: ClassVar[Category]
    source_dir: ClassVar[str]

    def __init__(self, catalog: Catalog | None = None) -> None:
        """Initialize translator.

        Args:
            catalog: Curated data tables, defaults to the bundled catalog
        """
        self.catalog = catalog or default_catalog()

    @abstractmethod
    def translate(
        self,
        source_dir: Path,
        policy: NamingPolicy,
    ) -> Iterator[TargetDocument]:
        """Produce target documents for everything under ``source_dir``.

        Args:
            source_dir: This category's directory inside the source tree
            policy: Naming policy for the install prefix

        Yields:
            Documents to write, with paths relative to the target root
        """

    def run(
        self,
        source_root: Path,
        ctx: TargetContext,
        prefix: str,
        dry_run: bool = False,
    ) -> list[str]:
        """Translate and write this category.

        Args:
            source_root: Root of the source tree
            ctx: Target location
            prefix: Install prefix, may be empty
            dry_run: Compute paths without writing anything

        Returns:
            Target-relative paths of every document written (or that would be)

        Raises:
            TranslationError: If a document cannot be read or written
        """
        source_dir = Path(source_root) / self.source_dir
        if not source_dir.is_dir():
            logger.debug("No %s directory in %s", self.source_dir, source_root)
            return []

        policy = NamingPolicy(prefix)
        written: list[str] = []
        current: str | None = None
        try:
            for document in self.translate(source_dir, policy):
                current = document.path
                if not dry_run:
                    self._write(ctx.cursor_dir / document.path, document.content)
                logger.debug("%s -> %s", self.category.value, document.path)
                written.append(document.path)
        except OSError as e:
            raise TranslationError(
                f"Failed to translate {self.category.value}: {e}",
                category=self.category.value,
                path=current,
            ) from e

        logger.info("%s: %d file(s)", self.category.value, len(written))
        return written

    @staticmethod
    def _write(target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    @staticmethod
    def _markdown_files(directory: Path) -> list[Path]:
        """Markdown files directly inside a directory, sorted by name."""
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".md")

    @staticmethod
    def _relative(*parts: str) -> str:
        return str(PurePosixPath(*parts))

    @staticmethod
    def _read_text(path: Path) -> str:
        """Read a source file; undecodable bytes become U+FFFD."""
        return path.read_text(encoding="utf-8", errors="replace")

    def _read_document(self, path: Path, source_path: str) -> SourceDocument:
        raw = self._read_text(path)
        header, body = parse_frontmatter(raw)
        return SourceDocument(path=source_path, raw=raw, header=header, body=body)

    def _is_skipped(self, source_path: str) -> bool:
        if self.catalog.is_skipped(source_path):
            logger.debug("Skipping %s", source_path)
            return True
        return False

    def _transform(self, content: str, prefix: str, source_path: str | None = None) -> str:
        return transform_content(
            content,
            prefix,
            source_path,
            strip_sections=self.catalog.strip_patterns,
        )
