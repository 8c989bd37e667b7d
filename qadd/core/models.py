"""Data models for qadd."""

from __future__ import annotations

import dataclasses
import enum
from typing import Optional

ANONYMOUS_FUNCTION = "(anonymous)"
ANONYMOUS_CLASS = "(anonymous class)"


@dataclasses.dataclass
class Chunk:
    """A size-bounded text segment with positional and section metadata.

    ``original_index`` and ``has_overlap`` are only filled in by the
    recursive strategy.
    """

    content: str
    chunk_index: int
    section_title: Optional[str] = None
    section_index: Optional[int] = None
    original_index: Optional[int] = None
    has_overlap: Optional[bool] = None

    @property
    def char_count(self) -> int:
        return len(self.content)


@dataclasses.dataclass(frozen=True)
class Span:
    """Source position: 1-based lines, 0-based character columns."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int


class FunctionKind(str, enum.Enum):
    FUNCTION = "function"
    METHOD = "method"
    ARROW_FUNCTION = "arrow_function"


@dataclasses.dataclass
class FunctionRecord:
    """A function-like construct found in a source file."""

    name: str
    kind: FunctionKind
    enclosing_class: Optional[str]
    span: Span
    code: str
    is_static: bool = False
