"""Data models for word-diff rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class LineKind(str, Enum):
    BASIC = "basic"
    PREFIX = "prefix"
    CHANGE = "change"
    SUFFIX = "suffix"


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """A single line of the rendered diff, tagged with its role."""

    kind: LineKind
    text: str
    forces_newline_break: bool = False  # set by a following '~' line

    @property
    def is_basic(self) -> bool:
        return self.kind is LineKind.BASIC


@dataclass(frozen=True)
class RenderOptions:
    """Knobs for column alignment."""

    indent_width: int = 8
    wide_char_width: float = 1.5


@dataclass
class AlignmentGroup:
    """A run of consecutive non-basic lines rendered as aligned columns."""

    lines: List[ClassifiedLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def add(self, line: ClassifiedLine) -> None:
        self.lines.append(line)
