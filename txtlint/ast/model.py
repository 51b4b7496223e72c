"""AST data model shared by the text and markdown providers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from txtlint.text import SourceLocation, TextRange


class TxtNodeType(StrEnum):
    """Node type tags emitted by the built-in providers."""

    DOCUMENT = "Document"
    PARAGRAPH = "Paragraph"
    STR = "Str"
    BREAK = "Break"
    HEADER = "Header"
    BLOCK_QUOTE = "BlockQuote"
    LIST = "List"
    LIST_ITEM = "ListItem"
    CODE_BLOCK = "CodeBlock"
    CODE = "Code"
    HORIZONTAL_RULE = "HorizontalRule"
    HTML = "Html"
    EMPHASIS = "Emphasis"
    STRONG = "Strong"
    LINK = "Link"
    IMAGE = "Image"


@dataclass(frozen=True, slots=True, eq=False)
class TxtNode:
    """One AST node.

    Nodes compare by identity: two `Str` nodes with the same text at
    different places are different nodes. The parent relation is not stored
    here; the lint session records it while walking the tree.
    """

    type: str
    range: TextRange
    loc: SourceLocation
    raw: str
    value: str | None = None
    children: tuple[TxtNode, ...] = ()
    data: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __iter__(self) -> Iterator[TxtNode]:
        return iter(self.children)

    def get(self, key: str, default: object = None) -> object:
        return self.data.get(key, default)

    def to_dict(self) -> dict[str, object]:
        """Flat attribute mapping of this node, without its children."""
        attributes: dict[str, object] = dict(self.data)
        attributes["type"] = self.type
        attributes["range"] = self.range.as_tuple()
        attributes["loc"] = {
            "start": {"line": self.loc.start.line, "column": self.loc.start.column},
            "end": {"line": self.loc.end.line, "column": self.loc.end.column},
        }
        attributes["raw"] = self.raw
        if self.value is not None:
            attributes["value"] = self.value
        return attributes


__all__ = [
    "TxtNode",
    "TxtNodeType",
]
