"""Release body assembly and truncation."""

from __future__ import annotations

from dataclasses import dataclass

TRUNCATION_MARKER = "\n\n(More)... ..."
TRUNCATION_RESERVE = 20

COMMITS_HEADING = "## *Commits*:\n\n"
DIFF_HEADING = "## *Git Diff*:\n\n"
SEPARATOR = "\n\n---\n\n"
DIFF_FOLD_OPEN = "<details><summary>Changes are listed as follows:</summary>\n"
DIFF_FOLD_CLOSE = "</details>\n"


@dataclass(frozen=True)
class ReleaseBody:
    """The body to publish plus the untruncated text kept as an artifact."""

    body: str
    full_body: str

    @property
    def truncated(self) -> bool:
        return self.body != self.full_body


def join_sections(commits_md: str, changelog: str, diff_md: str) -> str:
    """Concatenate the rendered sections into one Markdown document."""
    return (
        COMMITS_HEADING
        + commits_md
        + SEPARATOR
        + changelog
        + SEPARATOR
        + DIFF_HEADING
        + DIFF_FOLD_OPEN
        + diff_md
        + DIFF_FOLD_CLOSE
    )


def truncate_body(full_body: str, max_length: int) -> ReleaseBody:
    """Cut *full_body* to fit *max_length*, ending with the "(More)" marker."""
    if len(full_body) <= max_length:
        return ReleaseBody(body=full_body, full_body=full_body)
    cut = full_body[: max_length - TRUNCATION_RESERVE] + TRUNCATION_MARKER
    return ReleaseBody(body=cut, full_body=full_body)


def build_release_body(
    commits_md: str,
    changelog: str,
    diff_md: str,
    max_length: int,
) -> ReleaseBody:
    return truncate_body(join_sections(commits_md, changelog, diff_md), max_length)
