"""Integration tests for the publish pipeline against a temp git repo."""

import json
from pathlib import Path

import httpx
import pytest

from relnotes.config.schema import RelnotesConfig
from relnotes.release.context import RunContext
from relnotes.release.errors import GitHubError
from relnotes.release.github import GitHubClient
from relnotes.release.publisher import prepare_body, publish, read_changelog


class FakeGitHub:
    """Records calls and answers like the GitHub API."""

    def __init__(self, base_sha: str, artifacts=None, fail_on=None) -> None:
        self.base_sha = base_sha
        self.artifacts = artifacts or []
        self.fail_on = fail_on
        self.calls = []
        self.release_payload = None
        self.uploads = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path))
        if self.fail_on and self.fail_on in path:
            return httpx.Response(500, text="server error")
        if path.endswith("/tags"):
            return httpx.Response(200, json=[{"name": "v1.0.0.5", "commit": {"sha": self.base_sha}}])
        if request.method == "POST" and path.endswith("/releases"):
            self.release_payload = json.loads(request.content)
            return httpx.Response(201, json={
                "id": 99,
                "tag_name": self.release_payload["tag_name"],
                "html_url": "https://github.com/octo/app/releases/99",
                "upload_url": "https://uploads.github.com/repos/octo/app/releases/99/assets{?name,label}",
            })
        if path.endswith("/assets"):
            name = request.url.params["name"]
            self.uploads[name] = request.content
            return httpx.Response(201, json={"name": name, "size": len(request.content)})
        if path.endswith("/artifacts"):
            return httpx.Response(200, json={"artifacts": [
                {"id": i, "name": name} for i, name in enumerate(self.artifacts, 1)
            ]})
        if path.endswith("/zip"):
            return httpx.Response(200, content=b"PK-zip")
        return httpx.Response(404)


@pytest.fixture
def ctx(repo_with_change, git) -> RunContext:
    root, _ = repo_with_change
    return RunContext(
        repo="octo/app",
        run_id="42",
        run_number=6,
        sha=git(root, "rev-parse", "HEAD"),
        actor="octocat",
    )


@pytest.fixture
def cfg() -> RelnotesConfig:
    cfg = RelnotesConfig()
    cfg.release.unshallow = False
    return cfg


class TestPrepareBody:
    def test_sections(self, repo_with_change, cfg):
        root, base_sha = repo_with_change
        body = prepare_body(root, cfg, base_sha)
        text = body.full_body
        assert text.startswith("## *Commits*:\n\n### Change greeting")
        assert "- Fixed greeting" in text
        assert "### README.md" in text
        assert "```diff" in text
        assert "- world" in text
        assert "+ there" in text
        assert body.truncated is False

    def test_truncation(self, repo_with_change, cfg):
        root, base_sha = repo_with_change
        cfg.release.max_body_length = 100
        body = prepare_body(root, cfg, base_sha)
        assert body.truncated
        assert body.body.endswith("(More)... ...")
        assert len(body.body) == 80 + len("\n\n(More)... ...")

    def test_missing_changelog(self, tmp_path: Path):
        assert read_changelog(tmp_path / "nope.md") == ""


class TestPublish:
    def test_full_run(self, repo_with_change, ctx, cfg):
        root, base_sha = repo_with_change
        fake = FakeGitHub(base_sha, artifacts=["build-linux", "build-windows"])
        with GitHubClient(ctx.repo, "tok", transport=httpx.MockTransport(fake)) as gh:
            result = publish(ctx, cfg, gh, root)

        assert result.tag_name == "v1.0.1.6"
        assert result.previous_tag == "v1.0.0.5"
        assert result.release_name == "Release v1.0.1.6 by octocat"
        assert result.release_url.endswith("/releases/99")
        assert fake.release_payload["tag_name"] == "v1.0.1.6"
        assert "### README.md" in fake.release_payload["body"]
        assert [a.name for a in result.assets] == [
            "release_body.md",
            "build-linux.zip",
            "build-windows.zip",
        ]
        full = (root / "release_body.md").read_text(encoding="utf-8")
        assert fake.uploads["release_body.md"].decode("utf-8") == full
        assert fake.uploads["build-linux.zip"] == b"PK-zip"

    def test_full_body_kept_when_truncated(self, repo_with_change, ctx, cfg):
        root, base_sha = repo_with_change
        cfg.release.max_body_length = 120
        fake = FakeGitHub(base_sha)
        with GitHubClient(ctx.repo, "tok", transport=httpx.MockTransport(fake)) as gh:
            result = publish(ctx, cfg, gh, root)
        assert result.truncated
        assert fake.release_payload["body"].endswith("(More)... ...")
        uploaded = fake.uploads["release_body.md"].decode("utf-8")
        assert len(uploaded) == result.full_body_length > 120

    def test_dry_run_makes_no_writes(self, repo_with_change, ctx, cfg):
        root, base_sha = repo_with_change
        fake = FakeGitHub(base_sha)
        with GitHubClient(ctx.repo, "tok", transport=httpx.MockTransport(fake)) as gh:
            result = publish(ctx, cfg, gh, root, dry_run=True)
        assert result.dry_run
        assert all(method == "GET" for method, _ in fake.calls)
        assert (root / "release_body.md").exists()

    def test_skip_artifacts(self, repo_with_change, ctx, cfg):
        root, base_sha = repo_with_change
        cfg.release.upload_artifacts = False
        fake = FakeGitHub(base_sha, artifacts=["build"])
        with GitHubClient(ctx.repo, "tok", transport=httpx.MockTransport(fake)) as gh:
            result = publish(ctx, cfg, gh, root)
        assert [a.name for a in result.assets] == ["release_body.md"]

    def test_api_failure_propagates(self, repo_with_change, ctx, cfg):
        root, base_sha = repo_with_change
        fake = FakeGitHub(base_sha, fail_on="/releases")
        with GitHubClient(ctx.repo, "tok", transport=httpx.MockTransport(fake)) as gh:
            with pytest.raises(GitHubError):
                publish(ctx, cfg, gh, root)
