"""Text offsets, ranges and line/column positions."""

from txtlint.text.lines import LineIndex, LineInfo, Position, SourceLocation, split_lines
from txtlint.text.text import TextRange

__all__ = [
    "LineIndex",
    "LineInfo",
    "Position",
    "SourceLocation",
    "TextRange",
    "split_lines",
]
