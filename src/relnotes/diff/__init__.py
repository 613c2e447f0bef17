"""Word-diff to Markdown rendering."""

from relnotes.diff.align import aligned_width, display_width, render_group
from relnotes.diff.classifier import DiffClassifier, classify
from relnotes.diff.markdown import assemble, render_diff_markdown
from relnotes.diff.models import AlignmentGroup, ClassifiedLine, LineKind, RenderOptions

__all__ = [
    "AlignmentGroup",
    "ClassifiedLine",
    "DiffClassifier",
    "LineKind",
    "RenderOptions",
    "aligned_width",
    "assemble",
    "classify",
    "display_width",
    "render_diff_markdown",
    "render_group",
]
