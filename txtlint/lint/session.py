"""Per-call lint state: current text, diagnostics and the parent side table."""

from __future__ import annotations

import logging

from txtlint.ast import TxtNode
from txtlint.diagnostics import ERROR, Diagnostic, RuleError

logger = logging.getLogger(__name__)


class LintSession:
    """State scoped to exactly one lint call.

    A fresh session is created for every call, so nothing reported while
    linting one document can leak into the result of another.
    """

    __slots__ = ("_text", "_diagnostics", "_parents")

    def __init__(self, text: str) -> None:
        self._text = text
        self._diagnostics: list[Diagnostic] = []
        self._parents: dict[TxtNode, TxtNode | None] = {}

    @property
    def text(self) -> str:
        return self._text

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def report(self, rule_id: str, node: TxtNode, error: RuleError) -> Diagnostic:
        start = node.loc.start
        diagnostic = Diagnostic(
            rule_id=rule_id,
            message=error.message,
            line=start.line + (error.line or 0),
            column=start.column + (error.column or 0),
            node=node,
            severity=ERROR,
        )
        logger.debug("report %s:%s:%s %s", rule_id, diagnostic.line, diagnostic.column, error.message)
        self._diagnostics.append(diagnostic)
        return diagnostic

    def get_source(self, node: TxtNode | None = None, before_count: int = 0, after_count: int = 0) -> str:
        if node is None:
            return self._text
        start, end = node.range.widen(before_count or 0, after_count or 0).as_tuple()
        return self._text[start:end]

    def record_parent(self, node: TxtNode, parent: TxtNode | None) -> None:
        # First visit wins; the relation never changes afterwards.
        self._parents.setdefault(node, parent)

    def parent_of(self, node: TxtNode) -> TxtNode | None:
        return self._parents.get(node)
