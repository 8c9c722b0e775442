"""Stateless detection of installed content.

There is no manifest: an entry counts as installed when its name carries the
install prefix. In untracked mode (empty prefix) nothing can be detected.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .models import ScanResult, TargetContext
from .naming import NamingPolicy

logger = logging.getLogger(__name__)


def _scan_container(directory: Path, policy: NamingPolicy) -> list[str]:
    if not policy.tracks_installs or not directory.is_dir():
        return []
    try:
        return sorted(entry.name for entry in directory.iterdir() if policy.owns(entry.name))
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return []


def scan_directory(cursor_dir: Path, prefix: str) -> ScanResult:
    """List prefixed skills, agents and commands under one target root."""
    ctx = TargetContext.from_root(cursor_dir)
    policy = NamingPolicy(prefix)
    return ScanResult(
        cursor_dir=ctx.cursor_dir,
        skills=_scan_container(ctx.skills_dir, policy),
        agents=_scan_container(ctx.agents_dir, policy),
        commands=_scan_container(ctx.commands_dir, policy),
    )


def default_roots() -> list[Path]:
    """The user-level and project-level target roots."""
    return [Path.home() / ".cursor", Path.cwd() / ".cursor"]


def scan_all(prefix: str, roots: list[Path] | None = None) -> list[ScanResult]:
    """Scan well-known roots and keep those with installed content."""
    results = []
    seen: set[Path] = set()
    for root in roots if roots is not None else default_roots():
        resolved = root.expanduser().resolve()
        if resolved in seen or not resolved.is_dir():
            continue
        seen.add(resolved)
        result = scan_directory(root, prefix)
        if result.total_files > 0:
            results.append(result)
    return results


def format_scan_result(result: ScanResult) -> str:
    """One-line summary, e.g. ``/home/me/.cursor (12 skills, 3 agents)``."""
    parts = []
    if result.skills:
        parts.append(f"{len(result.skills)} skills")
    if result.agents:
        parts.append(f"{len(result.agents)} agents")
    if result.commands:
        parts.append(f"{len(result.commands)} commands")
    return f"{result.cursor_dir} ({', '.join(parts)})"
