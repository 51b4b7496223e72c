"""Plain-text provider: paragraphs of `Str` lines joined by `Break` nodes."""

from __future__ import annotations

from txtlint.ast import TxtNode, TxtNodeType
from txtlint.parser.builder import NodeBuilder
from txtlint.text import LineInfo, split_lines


def parse_text(source_text: str) -> TxtNode:
    """Parse plain text into a `Document` of `Paragraph` nodes.

    Blank lines separate paragraphs and produce no nodes.
    """
    builder = NodeBuilder(source_text)
    paragraphs: list[TxtNode] = []
    pending: list[LineInfo] = []

    for line in split_lines(source_text):
        if source_text[line.start : line.end].strip():
            pending.append(line)
            continue
        if pending:
            paragraphs.append(_paragraph(builder, pending))
            pending = []
    if pending:
        paragraphs.append(_paragraph(builder, pending))

    return builder.node(TxtNodeType.DOCUMENT, 0, len(source_text), children=paragraphs)


def _paragraph(builder: NodeBuilder, lines: list[LineInfo]) -> TxtNode:
    children: list[TxtNode] = []
    for index, line in enumerate(lines):
        children.append(
            builder.node(
                TxtNodeType.STR,
                line.start,
                line.end,
                value=builder.source[line.start : line.end],
            )
        )
        if index + 1 < len(lines):
            children.append(
                builder.node(
                    TxtNodeType.BREAK,
                    line.end,
                    line.break_end,
                    value=builder.source[line.end : line.break_end],
                )
            )
    return builder.node(TxtNodeType.PARAGRAPH, lines[0].start, lines[-1].end, children=children)
