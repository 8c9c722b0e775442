"""Source tree acquisition: a local directory or a shallow git clone."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .exceptions import SourceError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceTree:
    """A source tree ready for translation."""

    root: Path
    sha: str | None = None


def check_git() -> str:
    """Return the git version string.

    Raises:
        SourceError: If git is not installed
    """
    git = shutil.which("git")
    if git is None:
        msg = "Git is required but not found in PATH. Install it from https://git-scm.com/downloads"
        raise SourceError(msg)
    result = subprocess.run([git, "--version"], capture_output=True, text=True, check=False)
    return result.stdout.strip()


def _git(args: list[str], cwd: Path | None = None) -> str:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        msg = f"git {args[0]} failed: {e.stderr.strip() or e}"
        raise SourceError(msg, details={"args": args}) from e
    except OSError as e:
        msg = f"Failed to run git: {e}"
        raise SourceError(msg) from e
    return result.stdout.strip()


@contextmanager
def clone_repo(url: str, branch: str) -> Iterator[SourceTree]:
    """Shallow-clone a repository into a temporary directory.

    The directory is removed when the context exits, including on error.
    """
    check_git()
    with tempfile.TemporaryDirectory(prefix="ecc2cursor-") as tmp:
        repo_dir = Path(tmp) / "repo"
        logger.info("Cloning %s (%s)", url, branch)
        _git(["clone", "--depth", "1", "--branch", branch, url, str(repo_dir)])
        sha = _git(["rev-parse", "HEAD"], cwd=repo_dir)
        yield SourceTree(root=repo_dir, sha=sha)


@contextmanager
def open_source(
    local_path: Path | None,
    url: str,
    branch: str,
) -> Iterator[SourceTree]:
    """Use a local source tree when given, otherwise clone ``url``."""
    if local_path is not None:
        root = Path(local_path).expanduser()
        if not root.is_dir():
            msg = f"Source directory not found: {root}"
            raise SourceError(msg)
        yield SourceTree(root=root)
        return

    with clone_repo(url, branch) as tree:
        yield tree
