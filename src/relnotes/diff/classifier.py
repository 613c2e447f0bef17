"""Word-diff line classifier.

Walks ``git diff --word-diff=porcelain`` output once and tags every line as
structural (``basic``) or as part of a change run (``prefix`` / ``change`` /
``suffix``). A ``~`` line never becomes a line of its own: it marks the line
before it as ending with a forced newline.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import List, Optional

from relnotes.diff.models import ClassifiedLine, LineKind

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")

# Sub-headers that may follow ``diff --git`` before the first hunk.
_FILE_HEADER_PREFIXES = ("index ", "--- ", "+++ ")

FENCE_CLOSE = "\n```\n\n"

# Classifier states
_NONE = "none"
_DIFF = "diff"
_CONTENT = "content"


def _target_path(header: str) -> str:
    """Return the destination path (``b/...``) of a ``diff --git`` line."""
    m = _DIFF_HEADER_RE.match(header)
    if m:
        return m.group(2)
    _, sep, tail = header.rpartition(" b/")
    if sep:
        return tail
    return header[len("diff --git"):].strip()


def _file_heading(header: str) -> str:
    return (
        f"\n### {_target_path(header)}\n\n"
        "```bash\n"
        f"{header}\n"
        "```\n\n"
        "```diff"
    )


def _is_change(line: Optional[str]) -> bool:
    return line is not None and line[:1] in ("+", "-")


class DiffClassifier:
    """Classify word-diff porcelain text into :class:`ClassifiedLine` records.

    Usage::

        lines = DiffClassifier(diff_text).classify()
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = diff_text.replace("\r", "").split("\n")

    def classify(self) -> List[ClassifiedLine]:
        """Return the classified lines. Never raises on malformed input."""
        out: List[ClassifiedLine] = []
        state = _NONE
        fence_open = False
        total = len(self._lines)

        for idx, line in enumerate(self._lines):
            next_line = self._lines[idx + 1] if idx + 1 < total else None

            # --- new file section ---
            if line.startswith("diff --git"):
                text = _file_heading(line)
                if fence_open:
                    text = FENCE_CLOSE + text
                out.append(ClassifiedLine(LineKind.BASIC, text))
                state = _DIFF
                fence_open = True
                continue

            if state == _DIFF and line.startswith(_FILE_HEADER_PREFIXES):
                out.append(ClassifiedLine(LineKind.BASIC, line))
                continue

            # --- hunk header ---
            if line.startswith("@@ "):
                state = _CONTENT
                out.append(ClassifiedLine(LineKind.BASIC, line))
                continue

            # --- content ---
            if line.startswith(" "):
                if _is_change(next_line):
                    if line.strip():
                        out.append(ClassifiedLine(LineKind.PREFIX, line))
                    continue
                if out and out[-1].kind is LineKind.CHANGE:
                    if line.strip():
                        out.append(ClassifiedLine(LineKind.SUFFIX, line))
                    continue
                out.append(ClassifiedLine(LineKind.BASIC, "*" + line))
                continue

            if _is_change(line):
                out.append(ClassifiedLine(LineKind.CHANGE, f"{line[0]} {line[1:]}"))
                continue

            if line.startswith("~"):
                if out:
                    out[-1] = replace(out[-1], forces_newline_break=True)
                continue

            if line == "":
                out.append(ClassifiedLine(LineKind.BASIC, ""))
                continue

            # Anomaly: keep it visible rather than failing
            out.append(ClassifiedLine(LineKind.BASIC, "! " + line))

        if fence_open:
            out.append(ClassifiedLine(LineKind.BASIC, FENCE_CLOSE))
        return out


def classify(diff_text: str) -> List[ClassifiedLine]:
    """Shorthand for ``DiffClassifier(diff_text).classify()``."""
    return DiffClassifier(diff_text).classify()
