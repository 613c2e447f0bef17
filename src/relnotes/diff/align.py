"""Column alignment for change groups.

Widths use a rough East-Asian heuristic: every code point above U+00FF is
counted as ``wide_char_width`` units, everything else as one unit. It is not
exact for full-width Latin or emoji, and is kept as-is because rendered
release notes depend on it.
"""

from __future__ import annotations

import math
from typing import List

from relnotes.diff.models import AlignmentGroup, ClassifiedLine, RenderOptions

FORCED_BREAK = "\t\\n\n"
CONTINUATION = "\t\\\n"
NEWLINE = "\n"


def display_width(text: str, wide_char_width: float = 1.5) -> float:
    """Approximate rendered width of *text*."""
    wide = sum(1 for ch in text if ord(ch) > 0xFF)
    return (len(text) - wide) + wide * wide_char_width


def aligned_width(max_width: float, step: int = 8) -> int:
    """Smallest multiple of *step* that is ``>= max_width``."""
    if step <= 0:
        raise ValueError(f"indent step must be positive, got {step}")
    return int(math.ceil(max_width / step)) * step


def suffix_token(line: ClassifiedLine, is_last: bool) -> str:
    """Token that joins *line* to the next one in the group."""
    if line.forces_newline_break:
        return FORCED_BREAK
    if not is_last:
        return CONTINUATION
    return NEWLINE


def pad_lines(texts: List[str], options: RenderOptions) -> List[str]:
    """Right-pad *texts* to a shared width rounded up to the indent step."""
    if not texts:
        return []
    widths = [display_width(t, options.wide_char_width) for t in texts]
    target = aligned_width(max(widths), options.indent_width)
    # Fractional gaps (wide chars) are floored; spaces are whole units.
    return [t + " " * int(target - w) for t, w in zip(texts, widths)]


def render_group(group: AlignmentGroup, options: RenderOptions) -> str:
    """Render one alignment group: padded lines joined by suffix tokens."""
    if not group.lines:
        return ""
    padded = pad_lines([line.text for line in group.lines], options)
    last = len(group.lines) - 1
    return "".join(
        text + suffix_token(line, i == last)
        for i, (text, line) in enumerate(zip(padded, group.lines))
    )
