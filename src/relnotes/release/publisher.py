"""Release pipeline — tag, body, release, assets.

Runs once per CI invocation. Every step is sequential; a failure in git or
GitHub propagates and aborts the run.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from relnotes.config.schema import RelnotesConfig
from relnotes.diff.markdown import render_diff_markdown
from relnotes.git.adapter import fetch_unshallow, get_commit_log, get_word_diff
from relnotes.release.body import ReleaseBody, build_release_body
from relnotes.release.commits import render_commit_log
from relnotes.release.context import RunContext
from relnotes.release.github import GitHubClient, UploadedAsset
from relnotes.release.tags import resolve_latest_tag_and_next_version

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """Outcome of one pipeline run."""

    tag_name: str
    base_sha: str
    previous_tag: Optional[str] = None
    release_name: str = ""
    release_url: str = ""
    body_length: int = 0
    full_body_length: int = 0
    truncated: bool = False
    body_path: Optional[Path] = None
    assets: List[UploadedAsset] = field(default_factory=list)
    dry_run: bool = False
    duration_ms: float = 0.0


def read_changelog(path: Path) -> str:
    """Return the changelog text, or an empty string if the file is missing."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Changelog %s not found; leaving the section empty", path)
        return ""


def prepare_body(
    repo_root: Path,
    cfg: RelnotesConfig,
    base_ref: str,
    head_ref: str = "HEAD",
) -> ReleaseBody:
    """Collect commits, changelog, and word diff and assemble the body."""
    commit_log = get_commit_log(repo_root, base_ref)
    changelog = read_changelog(repo_root / cfg.release.changelog_file)
    diff_text = get_word_diff(repo_root, base_ref, head_ref)

    commits_md = render_commit_log(
        commit_log,
        collapse_after=cfg.commits.collapse_after,
        utc_offset_hours=cfg.commits.utc_offset_hours,
        time_label=cfg.commits.time_label,
    )
    diff_md = render_diff_markdown(diff_text, cfg.render.options())
    body = build_release_body(commits_md, changelog, diff_md, cfg.release.max_body_length)
    if body.truncated:
        logger.warning(
            "Release body is %d characters; truncated to %d",
            len(body.full_body),
            len(body.body),
        )
    return body


def write_body_artifact(body: ReleaseBody, path: Path) -> Path:
    path.write_text(body.full_body, encoding="utf-8")
    return path


def publish(
    ctx: RunContext,
    cfg: RelnotesConfig,
    client: GitHubClient,
    repo_root: Path,
    *,
    dry_run: bool = False,
) -> PublishResult:
    """Create the tagged release for *ctx* and attach its assets."""
    start = time.perf_counter()

    resolution = resolve_latest_tag_and_next_version(client, ctx.run_number)
    logger.info(
        "Latest tag %s at %s; next release %s",
        resolution.previous_tag,
        resolution.base_sha[:12],
        resolution.tag_name,
    )

    if cfg.release.unshallow:
        fetch_unshallow(repo_root)

    body = prepare_body(repo_root, cfg, resolution.base_sha, ctx.sha)
    body_path = write_body_artifact(body, repo_root / cfg.release.body_artifact)

    result = PublishResult(
        tag_name=resolution.tag_name,
        base_sha=resolution.base_sha,
        previous_tag=resolution.previous_tag,
        release_name=f"Release {resolution.tag_name} by {ctx.actor}",
        body_length=len(body.body),
        full_body_length=len(body.full_body),
        truncated=body.truncated,
        body_path=body_path,
        dry_run=dry_run,
    )

    if dry_run:
        result.duration_ms = round((time.perf_counter() - start) * 1000, 2)
        return result

    release = client.create_release(
        tag_name=resolution.tag_name,
        name=result.release_name,
        body=body.body,
    )
    result.release_url = release.html_url

    result.assets.append(
        client.upload_asset(
            release,
            cfg.release.body_artifact,
            body.full_body.encode("utf-8"),
            content_type="text/markdown",
        )
    )

    if cfg.release.upload_artifacts:
        for artifact in client.list_run_artifacts(ctx.run_id):
            data = client.download_artifact(artifact.id)
            result.assets.append(
                client.upload_asset(
                    release, f"{artifact.name}.zip", data, content_type="application/zip"
                )
            )

    result.duration_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.info("Release %s created with %d assets", result.tag_name, len(result.assets))
    return result
