"""JSON report of a publish run, for CI step outputs."""

from __future__ import annotations

import json
from typing import Any, Dict

from relnotes.release.publisher import PublishResult


def to_dict(result: PublishResult) -> Dict[str, Any]:
    """Convert PublishResult to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "tag": result.tag_name,
        "previous_tag": result.previous_tag,
        "base_sha": result.base_sha,
        "release_name": result.release_name,
        "release_url": result.release_url,
        "dry_run": result.dry_run,
        "body_length": result.body_length,
        "full_body_length": result.full_body_length,
        "truncated": result.truncated,
        **({"body_path": str(result.body_path)} if result.body_path else {}),
        "assets": [{"name": a.name, "size": a.size, "url": a.url} for a in result.assets],
        "duration_ms": result.duration_ms,
    }


def render(result: PublishResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
