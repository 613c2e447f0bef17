"""CI run context read from GitHub Actions environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from relnotes.release.errors import ReleaseError

_REQUIRED = ("GITHUB_REPOSITORY", "GITHUB_RUN_ID", "GITHUB_RUN_NUMBER", "GITHUB_SHA")


@dataclass(frozen=True)
class RunContext:
    repo: str  # owner/name
    run_id: str
    run_number: int
    sha: str
    actor: str = "github-actions"
    token: Optional[str] = None

    @property
    def owner(self) -> str:
        return self.repo.split("/", 1)[0]

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "RunContext":
        """Build the context from ``GITHUB_*`` variables."""
        env = os.environ if env is None else env
        missing = [name for name in _REQUIRED if not env.get(name)]
        if missing:
            raise ReleaseError(f"Missing environment variables: {', '.join(missing)}")
        try:
            run_number = int(env["GITHUB_RUN_NUMBER"])
        except ValueError as exc:
            raise ReleaseError(
                f"GITHUB_RUN_NUMBER is not a number: {env['GITHUB_RUN_NUMBER']!r}"
            ) from exc
        return cls(
            repo=env["GITHUB_REPOSITORY"],
            run_id=env["GITHUB_RUN_ID"],
            run_number=run_number,
            sha=env["GITHUB_SHA"],
            actor=env.get("GITHUB_ACTOR") or "github-actions",
            token=env.get("GITHUB_TOKEN") or None,
        )
