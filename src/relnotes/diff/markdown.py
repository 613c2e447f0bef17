"""Top-level diff → Markdown assembly."""

from __future__ import annotations

from typing import List, Optional

from relnotes.diff.align import render_group
from relnotes.diff.classifier import classify
from relnotes.diff.models import AlignmentGroup, ClassifiedLine, RenderOptions


def assemble(lines: List[ClassifiedLine], options: Optional[RenderOptions] = None) -> str:
    """Interleave basic lines and rendered groups in input order.

    A blank line separates every basic run from the group that follows it,
    and every group from the basic run after it.
    """
    options = options or RenderOptions()
    parts: List[str] = []
    group: Optional[AlignmentGroup] = None

    for line in lines:
        if line.is_basic:
            if group is not None:
                parts.append(render_group(group, options))
                parts.append("\n")
                group = None
            parts.append(line.text + "\n")
            continue
        if group is None:
            parts.append("\n")
            group = AlignmentGroup()
        group.add(line)

    if group is not None:
        parts.append(render_group(group, options))
    return "".join(parts)


def render_diff_markdown(raw_diff_text: str, options: Optional[RenderOptions] = None) -> str:
    """Render ``git diff --word-diff=porcelain`` output as Markdown.

    Each changed file becomes a ``###`` heading with its destination path,
    a ``bash`` fence holding the ``diff --git`` line and a ``diff`` fence
    holding the column-aligned hunks.
    """
    return assemble(classify(raw_diff_text), options)
