"""Git interface layer."""

from relnotes.git.adapter import (
    GitError,
    fetch_unshallow,
    get_commit_log,
    get_repo_root,
    get_word_diff,
    is_shallow,
)

__all__ = [
    "GitError",
    "fetch_unshallow",
    "get_commit_log",
    "get_repo_root",
    "get_word_diff",
    "is_shallow",
]
