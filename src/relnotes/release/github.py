"""Minimal GitHub REST client for tags, releases, and workflow artifacts.

Calls are sequential and not retried; any failure raises GitHubError and
ends the pipeline run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from relnotes.release.errors import GitHubError

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"
GITHUB_UPLOADS_BASE = "https://uploads.github.com"


@dataclass(frozen=True, slots=True)
class TagRef:
    name: str
    sha: str


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    tag_name: str
    html_url: str
    upload_url: str


@dataclass(frozen=True, slots=True)
class Artifact:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class UploadedAsset:
    name: str
    size: int
    url: str = ""


class GitHubClient:
    """Synchronous GitHub API client bound to one ``owner/repo``.

    Usage::

        with GitHubClient("octo/app", token) as gh:
            tag = gh.latest_tag()
    """

    def __init__(
        self,
        repo: str,
        token: Optional[str] = None,
        *,
        api_url: str = GITHUB_API_BASE,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.repo = repo
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout, connect=10.0),
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise GitHubError(
                f"{method} {url} failed with HTTP {status}: {exc.response.text[:200]}",
                status=status,
            ) from exc
        except httpx.RequestError as exc:
            raise GitHubError(f"{method} {url} failed: {exc}") from exc
        return response

    # ── tags ──────────────────────────────────────────────────────────────

    def latest_tag(self) -> Optional[TagRef]:
        """Return the first tag GitHub lists for the repo, or None."""
        data = self._request("GET", f"/repos/{self.repo}/tags", params={"per_page": 1}).json()
        if not data:
            return None
        first = data[0]
        return TagRef(name=first["name"], sha=first["commit"]["sha"])

    # ── releases ──────────────────────────────────────────────────────────

    def create_release(
        self,
        tag_name: str,
        name: str,
        body: str,
        *,
        target_commitish: Optional[str] = None,
        draft: bool = False,
        prerelease: bool = False,
    ) -> Release:
        payload: dict[str, Any] = {
            "tag_name": tag_name,
            "name": name,
            "body": body,
            "draft": draft,
            "prerelease": prerelease,
        }
        if target_commitish:
            payload["target_commitish"] = target_commitish
        data = self._request("POST", f"/repos/{self.repo}/releases", json=payload).json()
        logger.info("Created release %s (id %s)", tag_name, data["id"])
        return Release(
            id=data["id"],
            tag_name=data.get("tag_name", tag_name),
            html_url=data.get("html_url", ""),
            upload_url=data.get("upload_url", ""),
        )

    def upload_asset(
        self,
        release: Release,
        name: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> UploadedAsset:
        """Attach *data* to *release* as asset *name*."""
        url = release.upload_url.split("{", 1)[0] or (
            f"{GITHUB_UPLOADS_BASE}/repos/{self.repo}/releases/{release.id}/assets"
        )
        response = self._request(
            "POST",
            url,
            params={"name": name},
            content=data,
            headers={"Content-Type": content_type},
        )
        payload = response.json()
        logger.info("Uploaded asset %s (%d bytes)", name, len(data))
        return UploadedAsset(
            name=payload.get("name", name),
            size=payload.get("size", len(data)),
            url=payload.get("browser_download_url", ""),
        )

    # ── workflow artifacts ────────────────────────────────────────────────

    def list_run_artifacts(self, run_id: str) -> List[Artifact]:
        data = self._request(
            "GET",
            f"/repos/{self.repo}/actions/runs/{run_id}/artifacts",
            params={"per_page": 100},
        ).json()
        return [Artifact(id=a["id"], name=a["name"]) for a in data.get("artifacts", [])]

    def download_artifact(self, artifact_id: int) -> bytes:
        """Download an artifact as a zip archive."""
        return self._request(
            "GET", f"/repos/{self.repo}/actions/artifacts/{artifact_id}/zip"
        ).content
