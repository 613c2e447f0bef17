"""Errors raised by the release pipeline."""

from __future__ import annotations

from typing import Optional


class ReleaseError(Exception):
    """Raised when the release cannot be prepared (bad tag, missing env)."""


class GitHubError(Exception):
    """Raised when a GitHub API call fails."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
