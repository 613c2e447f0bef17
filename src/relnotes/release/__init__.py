"""Release pipeline: tags, commit log, body assembly, GitHub publishing."""

from relnotes.release.body import ReleaseBody, build_release_body, truncate_body
from relnotes.release.commits import CommitEntry, parse_commit_log, render_commit_log
from relnotes.release.context import RunContext
from relnotes.release.errors import GitHubError, ReleaseError
from relnotes.release.github import GitHubClient
from relnotes.release.publisher import PublishResult, prepare_body, publish
from relnotes.release.tags import TagResolution, next_tag, parse_tag, resolve_latest_tag_and_next_version

__all__ = [
    "CommitEntry",
    "GitHubClient",
    "GitHubError",
    "PublishResult",
    "ReleaseBody",
    "ReleaseError",
    "RunContext",
    "TagResolution",
    "build_release_body",
    "next_tag",
    "parse_commit_log",
    "parse_tag",
    "prepare_body",
    "publish",
    "render_commit_log",
    "resolve_latest_tag_and_next_version",
    "truncate_body",
]
