"""Node construction shared by the providers."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from txtlint.ast import TxtNode
from txtlint.text import LineIndex, TextRange


class NodeBuilder:
    """Creates nodes with ranges, locations and raw text resolved against one source."""

    __slots__ = ("_source", "_line_index")

    def __init__(self, source: str) -> None:
        self._source = source
        self._line_index = LineIndex(source)

    @property
    def source(self) -> str:
        return self._source

    def node(
        self,
        type: str,
        start: int,
        end: int,
        *,
        children: Iterable[TxtNode] = (),
        value: str | None = None,
        **data: object,
    ) -> TxtNode:
        return TxtNode(
            type=str(type),
            range=TextRange(start, end),
            loc=self._line_index.location_of(start, end),
            raw=self._source[start:end],
            value=value,
            children=tuple(children),
            data=MappingProxyType(data),
        )
