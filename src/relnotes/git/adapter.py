"""Git subprocess wrapper — commit log, word diff, shallow-clone handling."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = 120) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise GitError(f"git {args[0]} failed: {stderr or f'exit code {result.returncode}'}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def is_shallow(repo_root: Path) -> bool:
    """Return True when the checkout is a shallow clone."""
    out = _run_git(["rev-parse", "--is-shallow-repository"], cwd=repo_root)
    return out.strip() == "true"


def fetch_unshallow(repo_root: Path) -> bool:
    """Fetch full history for shallow CI checkouts. Returns True if fetched."""
    if not is_shallow(repo_root):
        logger.debug("Repository already has full history")
        return False
    _run_git(["fetch", "--prune", "--unshallow"], cwd=repo_root, timeout=600)
    return True


def get_commit_log(repo_root: Path, since_ref: str) -> str:
    """Return ``git log <since_ref>..`` in git's default format."""
    return _run_git(["log", "--no-color", f"{since_ref}.."], cwd=repo_root).strip()


def get_word_diff(repo_root: Path, old_ref: str, new_ref: str = "HEAD") -> str:
    """Return the word-level porcelain diff between two revisions."""
    return _run_git(
        ["diff", "--no-color", "--word-diff=porcelain", old_ref, new_ref],
        cwd=repo_root,
    )
