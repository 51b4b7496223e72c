"""Line tables and line/column positions."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """1-based line, 0-based column."""

    line: int
    column: int

    def __post_init__(self):
        if self.line < 1:
            raise ValueError("Position line is 1-based")
        if self.column < 0:
            raise ValueError("Position column cannot be negative")


@dataclass(frozen=True, slots=True)
class SourceLocation:
    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class LineInfo:
    """One physical line: `[start, end)` excludes the terminator, `break_end` includes it."""

    number: int
    start: int
    end: int
    break_end: int

    @property
    def has_break(self) -> bool:
        return self.break_end > self.end


def split_lines(source_text: str) -> list[LineInfo]:
    """Split text on `\\n`, `\\r\\n` and lone `\\r`.

    A trailing terminator does not open an extra empty line.
    """
    lines: list[LineInfo] = []
    offset = 0
    number = 1
    for match in _LINE_BREAK.finditer(source_text):
        lines.append(LineInfo(number=number, start=offset, end=match.start(), break_end=match.end()))
        offset = match.end()
        number += 1
    if offset < len(source_text) or not lines:
        lines.append(LineInfo(number=number, start=offset, end=len(source_text), break_end=len(source_text)))
    return lines


class LineIndex:
    """Maps character offsets to line/column positions and back."""

    __slots__ = ("_text", "_line_starts")

    def __init__(self, text: str) -> None:
        self._text = text
        starts = [0]
        starts.extend(match.end() for match in _LINE_BREAK.finditer(text))
        self._line_starts = tuple(starts)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position_at(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self._text))
        line_index = bisect_right(self._line_starts, offset) - 1
        return Position(line=line_index + 1, column=offset - self._line_starts[line_index])

    def offset_at(self, position: Position) -> int:
        if position.line > len(self._line_starts):
            return len(self._text)
        return min(self._line_starts[position.line - 1] + position.column, len(self._text))

    def location_of(self, start: int, end: int) -> SourceLocation:
        return SourceLocation(start=self.position_at(start), end=self.position_at(end))
