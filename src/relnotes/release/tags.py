"""Release tag parsing and the next-version policy.

Tags look like ``v<major>.<minor>.<patch>.<build>``. The next release bumps
the patch number and uses the CI run number as the build number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from relnotes.release.errors import ReleaseError

if TYPE_CHECKING:
    from relnotes.release.github import GitHubClient

_TAG_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?$")


@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int = 0
    patch: int = 0
    build: int = 0

    def to_tag(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}.{self.build}"

    def next(self, run_number: int) -> "Version":
        return Version(self.major, self.minor, self.patch + 1, run_number)


@dataclass(frozen=True)
class TagResolution:
    """The tag to create and the commit the release notes start from."""

    tag_name: str
    base_sha: str
    previous_tag: Optional[str] = None


def parse_tag(tag: str) -> Version:
    """Parse ``v1.2.3.4``; missing trailing components default to 0."""
    m = _TAG_RE.match(tag.strip())
    if m is None:
        raise ReleaseError(f"Unrecognised release tag: {tag!r}")
    major, minor, patch, build = (int(g) if g is not None else 0 for g in m.groups())
    return Version(major, minor, patch, build)


def next_tag(tag: str, run_number: int) -> str:
    """Return the tag that follows *tag* for CI run *run_number*."""
    return parse_tag(tag).next(run_number).to_tag()


def resolve_latest_tag_and_next_version(client: GitHubClient, run_number: int) -> TagResolution:
    """Look up the newest tag on GitHub and derive the next one from it."""
    latest = client.latest_tag()
    if latest is None:
        raise ReleaseError("Repository has no tags; push an initial v<major>.<minor>.<patch>.<build> tag")
    return TagResolution(
        tag_name=next_tag(latest.name, run_number),
        base_sha=latest.sha,
        previous_tag=latest.name,
    )
