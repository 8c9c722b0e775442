"""Sync and clean orchestration."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .catalog import Catalog
from .models import (
    Category,
    CleanResult,
    LanguageSelection,
    McpSelection,
    SyncOptions,
    SyncResult,
    TargetContext,
)
from .naming import NamingPolicy, validate_prefix
from .scanner import scan_directory
from .source import open_source
from .translators import get_translator
from .translators.mcp import translate_mcp

logger = logging.getLogger(__name__)


def run_translation(
    source_root: Path,
    ctx: TargetContext,
    prefix: str,
    categories: list[Category] | None = None,
    languages: LanguageSelection = "auto",
    mcp_selection: McpSelection = "all",
    dry_run: bool = False,
    catalog: Catalog | None = None,
) -> SyncResult:
    """Run the enabled translators over an already acquired source tree.

    Every output is recomputed, so re-running after a failure is always safe.

    Args:
        source_root: Root of the source tree
        ctx: Target location
        prefix: Install prefix, may be empty
        categories: Enabled categories, defaults to all
        languages: ``"auto"`` or explicit rule languages
        mcp_selection: Which available services to install
        dry_run: Compute counts without writing
        catalog: Curated data tables, defaults to the bundled catalog

    Returns:
        Per-category counts; the mcp count is the number of servers added
    """
    validate_prefix(prefix)
    enabled = set(categories) if categories is not None else set(Category)
    result = SyncResult(mcp_selection=mcp_selection)

    for category in Category:
        if category not in enabled:
            continue
        if category is Category.MCP:
            mcp = translate_mcp(source_root, ctx, dry_run, mcp_selection, catalog)
            result.counts[category.value] = mcp.added
            result.mcp_selection = mcp.selection
            continue
        translator = get_translator(category, catalog, languages)
        written = translator.run(source_root, ctx, prefix, dry_run)
        result.counts[category.value] = len(written)

    logger.info("Translated %d file(s) into %s", result.total_files, ctx.cursor_dir)
    return result


def run_sync(options: SyncOptions, catalog: Catalog | None = None) -> SyncResult:
    """Acquire the source tree, translate it, and release it."""
    with open_source(options.source_path, options.repository, options.branch) as tree:
        result = run_translation(
            tree.root,
            options.ctx,
            options.prefix,
            categories=options.categories,
            languages=options.languages,
            mcp_selection=options.mcp_selection,
            dry_run=options.dry_run,
            catalog=catalog,
        )
        result.sha = tree.sha
    return result


def run_clean(ctx: TargetContext, prefix: str) -> CleanResult:
    """Remove every prefixed skill directory, agent file and command file.

    The service registry is never touched. In untracked mode (empty prefix)
    nothing can be attributed to this tool, so nothing is removed.
    """
    policy = NamingPolicy(prefix)
    if not policy.tracks_installs:
        logger.warning("Clean skipped: no prefix, installed files cannot be identified")
        return CleanResult()

    scan = scan_directory(ctx.cursor_dir, prefix)

    for name in scan.skills:
        target = ctx.skills_dir / name
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink(missing_ok=True)
    for name in scan.agents:
        (ctx.agents_dir / name).unlink(missing_ok=True)
    for name in scan.commands:
        (ctx.commands_dir / name).unlink(missing_ok=True)

    result = CleanResult(skills=scan.skills, agents=scan.agents, commands=scan.commands)
    logger.info("Removed %d entries from %s", result.total_removed, ctx.cursor_dir)
    return result
