"""Diagnostics core types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from txtlint.ast import TxtNode
from txtlint.text import SourceLocation, TextRange

Severity = Literal["error"]

ERROR: Final[Severity] = "error"


@dataclass(frozen=True, slots=True)
class RuleError:
    """Problem reported by a rule, positioned relative to its anchor node.

    `line`/`column` are offsets from the node's start; `None` means the
    node's own start.
    """

    message: str
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Resolved problem with an absolute position and the reporting rule id."""

    rule_id: str
    message: str
    line: int
    column: int
    node: TxtNode
    severity: Severity = ERROR

    @property
    def type(self) -> str:
        return self.node.type

    @property
    def range(self) -> TextRange:
        return self.node.range

    @property
    def loc(self) -> SourceLocation:
        return self.node.loc

    def to_dict(self) -> dict[str, object]:
        """Flat record: the node's attributes overlaid with the diagnostic fields."""
        record = self.node.to_dict()
        record.update(
            ruleId=self.rule_id,
            message=self.message,
            line=self.line,
            column=self.column,
            severity=self.severity,
        )
        return record
