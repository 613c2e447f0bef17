"""Commit log → Markdown.

Parses ``git log`` output in git's default format::

    commit 5d9af644ceb59cd20af6b07d43e5019ae4c5a9db
    Author: Jane Doe <jane@example.com>
    Date:   Sun May 5 21:41:09 2024 -0700

        subject line
        more body

and renders one ``###`` section per commit. Commits past ``collapse_after``
are folded into a ``<details>`` block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

_COMMIT_RE = re.compile(
    r"commit ([0-9a-f]{40})[^\n]*\n"
    r"(?:Merge: [^\n]*\n)?"
    r"Author: (.*) <(.*)>\n"
    r"Date: (.*)\n\n"
    r"((?:.|\n)*?)(?=\ncommit [0-9a-f]{40}|\Z)"
)
_GIT_DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"

FOLD_OPEN = "<details><summary>Expand all commits ... </summary>\n\n"
FOLD_CLOSE = "</details>"


@dataclass(frozen=True, slots=True)
class CommitEntry:
    sha: str
    author: str
    email: str
    date: str
    subject: str
    body: str


def parse_commit_log(log_text: str) -> List[CommitEntry]:
    """Extract commits from default-format ``git log`` text."""
    entries: List[CommitEntry] = []
    for m in _COMMIT_RE.finditer(log_text.replace("\r", "")):
        sha, author, email, date, message = m.groups()
        content = [line.strip() for line in message.split("\n")]
        entries.append(
            CommitEntry(
                sha=sha,
                author=author.strip(),
                email=email.strip(),
                date=date.strip(),
                subject=content[0],
                body="\n".join(content[1:]).strip("\n"),
            )
        )
    return entries


def format_commit_date(raw: str, utc_offset_hours: float = 8, label: str = "") -> str:
    """Re-render a git date in a fixed UTC offset. Unparseable dates pass through."""
    try:
        parsed = datetime.strptime(" ".join(raw.split()), _GIT_DATE_FORMAT)
    except ValueError:
        return raw
    local = parsed.astimezone(timezone(timedelta(hours=utc_offset_hours)))
    return local.strftime("%Y-%m-%d %H:%M:%S") + label


def render_commit(entry: CommitEntry, date_text: str) -> str:
    text = (
        f"### {entry.subject}\n\n"
        f"*{date_text}* by [{entry.author}](mailto:{entry.email})\n\n"
    )
    if entry.body:
        text += f"{entry.body}\n\n"
    return text


def render_commit_log(
    log_text: str,
    *,
    collapse_after: int = 3,
    utc_offset_hours: float = 8,
    time_label: str = "",
    entries: Optional[List[CommitEntry]] = None,
) -> str:
    """Render ``git log`` output as Markdown headings."""
    if entries is None:
        entries = parse_commit_log(log_text)
    parts: List[str] = []
    for count, entry in enumerate(entries):
        if count == collapse_after:
            parts.append(FOLD_OPEN)
        date_text = format_commit_date(entry.date, utc_offset_hours, time_label)
        parts.append(render_commit(entry, date_text))
    if len(entries) > collapse_after:
        parts.append(FOLD_CLOSE)
    return "".join(parts)
