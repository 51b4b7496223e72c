"""Per-rule handle: reporting channel and source access scoped to one rule id."""

from __future__ import annotations

from typing import Protocol

from txtlint.ast import TxtNode
from txtlint.config import TextLintConfig
from txtlint.diagnostics import RuleError
from txtlint.errors import LintStateError


class LintChannel(Protocol):
    """What the engine exposes to rule handles."""

    def report(self, rule_id: str, node: TxtNode, error: RuleError) -> None: ...

    def get_source(
        self,
        node: TxtNode | None = None,
        before_count: int = 0,
        after_count: int = 0,
    ) -> str | None: ...

    def get_parent(self, node: TxtNode) -> TxtNode | None: ...


class RuleContext:
    """Handle issued to a rule factory at registration time.

    Every report made through this handle carries the rule's id, and every
    read goes to whichever lint call is currently running on the engine.
    """

    __slots__ = ("_rule_id", "_channel", "_config")

    RuleError = RuleError

    def __init__(self, rule_id: str, channel: LintChannel, config: TextLintConfig) -> None:
        self._rule_id = rule_id
        self._channel = channel
        self._config = config

    @property
    def rule_id(self) -> str:
        return self._rule_id

    @property
    def config(self) -> TextLintConfig:
        return self._config

    def report(self, node: TxtNode, error: RuleError | str) -> None:
        if isinstance(error, str):
            error = RuleError(error)
        self._channel.report(self._rule_id, node, error)

    def get_source(
        self,
        node: TxtNode | None = None,
        before_count: int = 0,
        after_count: int = 0,
    ) -> str | None:
        """Text of `node`, widened by `before_count`/`after_count` characters.

        Without a node this is the whole document. Returns `None` when no
        lint call is running.
        """
        return self._channel.get_source(node, before_count, after_count)

    def get_text(self, node: TxtNode) -> str:
        source = self._channel.get_source(node, 0, 0)
        if source is None:
            raise LintStateError(f"Rule '{self._rule_id}' read source outside of a lint call")
        return source

    def get_parent(self, node: TxtNode) -> TxtNode | None:
        return self._channel.get_parent(node)

    def __repr__(self) -> str:
        return f"RuleContext({self._rule_id!r})"
