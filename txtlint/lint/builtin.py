"""Built-in rules."""

from __future__ import annotations

from collections.abc import Mapping
import re
from typing import Final

from txtlint.ast import TxtNode, TxtNodeType
from txtlint.diagnostics import RuleError
from txtlint.lint.context import RuleContext
from txtlint.lint.events import exit_key
from txtlint.lint.rules import RuleFactory, RuleHandlers, RuleOptions
from txtlint.text import split_lines

DEFAULT_MAX_LINE_LENGTH: Final[int] = 100

_UNCHECKED_TASK = re.compile(r"\[\s+\]\s")


def no_todo(context: RuleContext, options: RuleOptions) -> RuleHandlers:
    """Flags `TODO:` markers in text and unchecked `[ ]` task list items.

    Text inside links is ignored.
    """
    keywords = ("TODO:",)
    if isinstance(options, Mapping) and options.get("keywords"):
        keywords = tuple(options["keywords"])
    link_depth = 0

    def enter_link(node: TxtNode) -> None:
        nonlocal link_depth
        link_depth += 1

    def leave_link(node: TxtNode) -> None:
        nonlocal link_depth
        link_depth -= 1

    def check_str(node: TxtNode) -> None:
        if link_depth:
            return
        text = context.get_text(node)
        for keyword in keywords:
            index = text.find(keyword)
            if index >= 0:
                context.report(node, RuleError(f"Found TODO: '{text}'", column=index))
                return

    def check_list_item(node: TxtNode) -> None:
        text = context.get_text(node)
        if _UNCHECKED_TASK.match(text, _marker_width(text)):
            context.report(node, RuleError(f"Found TODO: '{text}'"))

    return {
        TxtNodeType.LINK: enter_link,
        exit_key(TxtNodeType.LINK): leave_link,
        TxtNodeType.STR: check_str,
        TxtNodeType.LIST_ITEM: check_list_item,
    }


def max_line_length(context: RuleContext, options: RuleOptions) -> RuleHandlers:
    limit = DEFAULT_MAX_LINE_LENGTH
    if isinstance(options, Mapping):
        limit = int(options.get("max", DEFAULT_MAX_LINE_LENGTH))
    if limit < 1:
        raise ValueError(f"max must be a positive integer, got {limit}")

    def check_document(node: TxtNode) -> None:
        text = context.get_source() or ""
        for line in split_lines(text):
            if line.end - line.start > limit:
                context.report(
                    node,
                    RuleError(
                        f"Line {line.number} exceeds the maximum line length of {limit}.",
                        line=line.number - node.loc.start.line,
                        column=limit - node.loc.start.column,
                    ),
                )

    return {TxtNodeType.DOCUMENT: check_document}


def _marker_width(text: str) -> int:
    match = re.match(r"(?:[-+*]|\d{1,9}[.)])[ \t]+", text)
    return match.end() if match is not None else 0


BUILTIN_RULES: Final[Mapping[str, RuleFactory]] = {
    "no-todo": no_todo,
    "max-line-length": max_line_length,
}
