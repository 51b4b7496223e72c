"""CommonMark provider on top of `markdown-it-py`.

markdown-it turns the text into a flat token stream: block tokens carry
`map` line ranges and `inline` tokens carry child tokens without positions.
This module rebuilds the tree with an explicit stack and recovers character
offsets by walking the original source, so every node slices back to the
text it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html
import re

from markdown_it import MarkdownIt
from markdown_it.token import Token

from txtlint.ast import TxtNode, TxtNodeType
from txtlint.parser.builder import NodeBuilder
from txtlint.text import LineInfo, split_lines

_ENTITY = re.compile(r"&(?:#[xX][0-9A-Fa-f]{1,6}|#[0-9]{1,7}|[A-Za-z][A-Za-z0-9]{1,31});")

_MARKDOWN = MarkdownIt("commonmark")

_CONTAINERS = {
    "blockquote_open": TxtNodeType.BLOCK_QUOTE,
    "bullet_list_open": TxtNodeType.LIST,
    "ordered_list_open": TxtNodeType.LIST,
    "list_item_open": TxtNodeType.LIST_ITEM,
    "paragraph_open": TxtNodeType.PARAGRAPH,
    "heading_open": TxtNodeType.HEADER,
}

_INLINE_CONTAINERS = {
    "em_open": TxtNodeType.EMPHASIS,
    "strong_open": TxtNodeType.STRONG,
    "link_open": TxtNodeType.LINK,
}


@dataclass(slots=True)
class _Frame:
    """An open block token waiting for its close token."""

    type: str
    token: Token
    start: int
    children: list[TxtNode] = field(default_factory=list)
    # List items: how many columns the item prefix spans from `base`.
    width: int = 0
    line: int = -1
    end: int = -1


def parse_markdown(source_text: str) -> TxtNode:
    """Parse markdown into a `Document` node."""
    builder = NodeBuilder(source_text)
    children = _TreeBuilder(builder).build(_MARKDOWN.parse(source_text))
    return builder.node(TxtNodeType.DOCUMENT, 0, len(source_text), children=children)


class _TreeBuilder:
    def __init__(self, builder: NodeBuilder) -> None:
        self._builder = builder
        self._source = builder.source
        self._lines = split_lines(builder.source)
        self._stack: list[_Frame] = []

    def build(self, tokens: list[Token]) -> list[TxtNode]:
        root: list[TxtNode] = []
        for token in tokens:
            if token.nesting == 1:
                self._open(token)
                continue
            if token.nesting == -1:
                node = self._close(self._stack.pop())
            elif token.type == "inline":
                self._inline(token)
                continue
            else:
                node = self._leaf(token)
            if node is not None:
                (self._stack[-1].children if self._stack else root).append(node)
        return root

    # ===== lines and container prefixes

    def _line(self, number: int) -> LineInfo:
        return self._lines[min(number, len(self._lines) - 1)]

    def _line_text(self, line: LineInfo) -> str:
        return self._source[line.start : line.end]

    def _prefix_column(self, number: int) -> int:
        """Column where content starts on a line once the open containers' markers are skipped."""
        text = self._line_text(self._line(number))
        column = 0
        for frame in self._stack:
            if frame.type == TxtNodeType.BLOCK_QUOTE:
                marker = _skip_spaces(text, column, limit=3)
                if marker >= len(text) or text[marker] != ">":
                    # lazy continuation line
                    return column
                column = marker + 1
                if column < len(text) and text[column] in " \t":
                    column += 1
            elif frame.type == TxtNodeType.LIST_ITEM:
                if number == frame.line:
                    column = min(column + frame.width, len(text))
                else:
                    column = _skip_spaces(text, column, limit=frame.width)
        return column

    def _content_start(self, number: int) -> int:
        line = self._line(number)
        text = self._line_text(line)
        return line.start + _skip_spaces(text, self._prefix_column(number))

    def _last_content_end(self, first: int, last: int) -> int:
        """End of the last non-blank line in `[first, last)`, without trailing spaces."""
        for number in range(min(last, len(self._lines)) - 1, first - 1, -1):
            line = self._line(number)
            text = self._line_text(line)
            if text.strip():
                return line.start + len(text.rstrip())
        return self._content_start(first)

    # ===== blocks

    def _open(self, token: Token) -> None:
        node_type = _CONTAINERS.get(token.type, "")
        first = token.map[0] if token.map else 0
        frame = _Frame(type=node_type, token=token, start=-1, line=first)

        if node_type == TxtNodeType.LIST_ITEM:
            line = self._line(first)
            text = self._line_text(line)
            base = self._prefix_column(first)
            marker = _skip_spaces(text, base, limit=3)
            marker_end = min(marker + len((token.info or "") + token.markup), len(text))
            gap = _skip_spaces(text, marker_end, limit=len(text))
            if gap >= len(text) or gap - marker_end > 4:
                content = marker_end + 1
            else:
                content = gap
            frame.start = line.start + marker
            frame.end = line.start + marker_end
            frame.width = content - base
        elif node_type in (TxtNodeType.BLOCK_QUOTE, TxtNodeType.HEADER):
            frame.start = self._content_start(first)
            frame.end = frame.start + 1
        self._stack.append(frame)

    def _close(self, frame: _Frame) -> TxtNode | None:
        token = frame.token
        children = frame.children
        if frame.type == TxtNodeType.LIST:
            if not children:
                return None
            return self._builder.node(
                TxtNodeType.LIST,
                children[0].range.start,
                children[-1].range.end,
                children=children,
                ordered=token.type == "ordered_list_open",
            )
        if frame.type in (TxtNodeType.BLOCK_QUOTE, TxtNodeType.LIST_ITEM):
            end = max(frame.end, children[-1].range.end) if children else frame.end
            return self._builder.node(frame.type, frame.start, end, children=children)
        if frame.type == TxtNodeType.HEADER:
            assert token.map is not None
            end = self._last_content_end(token.map[0], token.map[1])
            depth = len(token.markup) if token.markup.startswith("#") else (1 if token.markup == "=" else 2)
            return self._builder.node(TxtNodeType.HEADER, frame.start, max(end, frame.start), children=children, depth=depth)
        if frame.type == TxtNodeType.PARAGRAPH:
            if frame.start < 0:
                return None
            return self._builder.node(TxtNodeType.PARAGRAPH, frame.start, frame.end, children=children)
        # Unknown container: hand its children to the enclosing block.
        if self._stack:
            self._stack[-1].children.extend(children)
        return None

    def _leaf(self, token: Token) -> TxtNode | None:
        if token.map is None:
            return None
        first, last = token.map
        if token.type == "code_block":
            line = self._line(first)
            start = line.start + self._prefix_column(first)
            end = self._last_content_end(first, last)
            return self._builder.node(TxtNodeType.CODE_BLOCK, start, max(start, end), value=_strip_newline(token.content))
        start = self._content_start(first)
        end = max(start, self._last_content_end(first, last))
        if token.type == "fence":
            data: dict[str, object] = {}
            lang = token.info.split()[0] if token.info.strip() else ""
            if lang:
                data["lang"] = lang
            return self._builder.node(TxtNodeType.CODE_BLOCK, start, end, value=_strip_newline(token.content), **data)
        if token.type == "html_block":
            return self._builder.node(TxtNodeType.HTML, start, end, value=_strip_newline(token.content))
        if token.type == "hr":
            return self._builder.node(TxtNodeType.HORIZONTAL_RULE, start, end)
        return None

    # ===== inline content

    def _inline(self, token: Token) -> None:
        frame = self._stack[-1]
        assert token.map is not None
        first, last = token.map
        if frame.type == TxtNodeType.HEADER and frame.token.markup.startswith("#"):
            segments = self._atx_segments(first, frame.start, token.content)
        else:
            segments = self._paragraph_segments(first, last)
        if not segments:
            return
        if frame.type == TxtNodeType.PARAGRAPH:
            frame.start = segments[0][0]
            frame.end = segments[-1][1]
        frame.children.extend(_InlineBuilder(self._builder, segments).build(token.children or []))

    def _atx_segments(self, number: int, marker: int, content: str) -> list[tuple[int, int, int]]:
        line = self._line(number)
        if not content:
            return []
        found = self._source.find(content, marker, line.end)
        start = found if found >= 0 else marker
        return [(start, min(start + len(content), line.end), line.break_end)]

    def _paragraph_segments(self, first: int, last: int) -> list[tuple[int, int, int]]:
        segments: list[tuple[int, int, int]] = []
        for number in range(first, min(last, len(self._lines))):
            line = self._line(number)
            start = self._content_start(number)
            end = line.end
            if number == last - 1:
                end = line.start + len(self._line_text(line).rstrip())
            segments.append((start, max(start, end), line.break_end))
        return segments


class _InlineBuilder:
    """Positions markdown-it inline tokens against the paragraph's source lines.

    The segments are joined with `\\n` into one string whose indices map back
    to source offsets; tokens are then matched left to right with a cursor.
    """

    def __init__(self, builder: NodeBuilder, segments: list[tuple[int, int, int]]) -> None:
        self._builder = builder
        source = builder.source
        parts: list[str] = []
        offsets: list[int] = []
        self._breaks: dict[int, int] = {}
        for index, (start, end, break_end) in enumerate(segments):
            parts.append(source[start:end])
            offsets.extend(range(start, end))
            if index + 1 < len(segments):
                self._breaks[len(offsets)] = break_end
                parts.append("\n")
                offsets.append(end)
        self._text = "".join(parts)
        self._offsets = offsets
        self._end_offset = segments[-1][1]
        self._cursor = 0

    def _offset(self, index: int) -> int:
        return self._offsets[index] if index < len(self._offsets) else self._end_offset

    def _end(self, index: int) -> int:
        """Source offset just past text index `index - 1`."""
        if index <= 0:
            return self._offset(0)
        if index - 1 in self._breaks:
            return self._breaks[index - 1]
        return self._offset(index - 1) + 1

    def _find(self, needle: str) -> int:
        if self._text.startswith(needle, self._cursor):
            return self._cursor
        found = self._text.find(needle, self._cursor)
        return found if found >= 0 else self._cursor

    def _node(self, node_type: str, start: int, end: int, **kwargs: object) -> TxtNode:
        start_offset = self._offset(start)
        return self._builder.node(node_type, start_offset, max(start_offset, self._end(end)), **kwargs)

    def build(self, tokens: list[Token]) -> list[TxtNode]:
        root: list[TxtNode] = []
        # (node type, start index, children, data)
        stack: list[tuple[str, int, list[TxtNode], dict[str, object]]] = []
        text_start = -1
        text_value: list[str] = []

        def children() -> list[TxtNode]:
            return stack[-1][2] if stack else root

        for token in tokens:
            if token.type in ("text", "text_special"):
                if text_start < 0:
                    text_start = self._cursor
                self._consume_text(token.content)
                text_value.append(token.content)
                continue
            if text_start >= 0:
                if self._cursor > text_start:
                    children().append(self._node(TxtNodeType.STR, text_start, self._cursor, value="".join(text_value)))
                text_start = -1
                text_value = []

            if token.type in ("softbreak", "hardbreak"):
                newline = self._text.find("\n", self._cursor)
                if newline < 0:
                    continue
                start = self._cursor
                self._cursor = newline + 1
                children().append(self._node(TxtNodeType.BREAK, start, self._cursor, value="\n"))
                while self._cursor < len(self._text) and self._text[self._cursor] in " \t":
                    self._cursor += 1
            elif token.type == "code_inline":
                start = self._find(token.markup)
                self._cursor = self._code_span_end(start, token.markup)
                children().append(self._node(TxtNodeType.CODE, start, self._cursor, value=token.content))
            elif token.type == "html_inline":
                start = self._find(token.content)
                self._cursor = min(start + len(token.content), len(self._text))
                children().append(self._node(TxtNodeType.HTML, start, self._cursor, value=token.content))
            elif token.type == "image":
                start = self._find("![")
                label_end = _bracket_end(self._text, start + 1)
                self._cursor = _link_tail(self._text, label_end)
                image: dict[str, object] = {"url": token.attrGet("src"), "alt": token.content}
                if token.attrGet("title") is not None:
                    image["title"] = token.attrGet("title")
                children().append(self._node(TxtNodeType.IMAGE, start, self._cursor, value=token.content, **image))
            elif token.type in _INLINE_CONTAINERS:
                opener = "<" if token.markup == "autolink" else (token.markup or "[")
                start = self._find(opener)
                self._cursor = min(start + len(opener), len(self._text))
                data: dict[str, object] = {}
                if token.type == "link_open":
                    data["url"] = token.attrGet("href")
                    if token.attrGet("title") is not None:
                        data["title"] = token.attrGet("title")
                stack.append((_INLINE_CONTAINERS[token.type], start, [], data))
            elif token.type in ("em_close", "strong_close", "link_close") and stack:
                if token.type != "link_close":
                    self._cursor = min(self._find(token.markup) + len(token.markup), len(self._text))
                elif token.markup == "autolink":
                    self._cursor = min(self._find(">") + 1, len(self._text))
                else:
                    self._cursor = _link_tail(self._text, min(self._find("]") + 1, len(self._text)))
                node_type, start, nested, data = stack.pop()
                children().append(self._node(node_type, start, self._cursor, children=nested, **data))

        if text_start >= 0 and self._cursor > text_start:
            children().append(self._node(TxtNodeType.STR, text_start, self._cursor, value="".join(text_value)))
        while stack:
            node_type, start, nested, data = stack.pop()
            children().append(self._node(node_type, start, self._cursor, children=nested, **data))
        return root

    def _consume_text(self, content: str) -> None:
        """Advance past `content`, allowing for backslash escapes and entity references."""
        text = self._text
        cursor = self._cursor
        index = 0
        while index < len(content) and cursor < len(text):
            char = text[cursor]
            if char == "&":
                entity = _ENTITY.match(text, cursor)
                if entity is not None:
                    decoded = html.unescape(entity.group())
                    if content.startswith(decoded, index):
                        cursor = entity.end()
                        index += len(decoded)
                        continue
            if char == content[index]:
                cursor += 1
                index += 1
            elif char == "\\" and cursor + 1 < len(text) and text[cursor + 1] == content[index]:
                cursor += 2
                index += 1
            else:
                break
        self._cursor = cursor

    def _code_span_end(self, start: int, fence: str) -> int:
        text = self._text
        search = start + len(fence)
        while True:
            close = text.find(fence, search)
            if close < 0:
                return len(text)
            run_end = close
            while run_end < len(text) and text[run_end] == "`":
                run_end += 1
            if run_end - close == len(fence):
                return run_end
            search = run_end


def _skip_spaces(text: str, column: int, *, limit: int) -> int:
    end = min(len(text), column + limit)
    while column < end and text[column] in " \t":
        column += 1
    return column


def _strip_newline(value: str) -> str:
    return value[:-1] if value.endswith("\n") else value


def _bracket_end(text: str, position: int) -> int:
    """Index just past the `]` that closes the `[` at `position`."""
    depth = 0
    index = position
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return len(text)


def _link_tail(text: str, position: int) -> int:
    """Index just past a link's `(destination "title")` or `[reference]` part, if any."""
    if position >= len(text):
        return len(text)
    if text[position] == "[":
        close = text.find("]", position + 1)
        return close + 1 if close >= 0 else position
    if text[position] != "(":
        return position

    depth = 0
    quote = ""
    index = position
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if quote:
            if char == quote:
                quote = ""
        elif char in "\"'" and text[index - 1] in " \t\n":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return position
