"""Rule dispatch and diagnostic collection."""

from txtlint.lint.builtin import BUILTIN_RULES, max_line_length, no_todo
from txtlint.lint.context import LintChannel, RuleContext
from txtlint.lint.engine import TextLintEngine
from txtlint.lint.events import EXIT_SUFFIX, EventDispatcher, NodeHandler, exit_key
from txtlint.lint.registry import RuleEntry, RuleRegistry
from txtlint.lint.rules import (
    RuleFactory,
    RuleHandlers,
    RuleOptions,
    RulesConfig,
    is_disabled,
    validate_rule_handlers,
)
from txtlint.lint.session import LintSession

__all__ = [
    "BUILTIN_RULES",
    "EXIT_SUFFIX",
    "EventDispatcher",
    "LintChannel",
    "LintSession",
    "NodeHandler",
    "RuleContext",
    "RuleEntry",
    "RuleFactory",
    "RuleHandlers",
    "RuleOptions",
    "RuleRegistry",
    "RulesConfig",
    "TextLintEngine",
    "exit_key",
    "is_disabled",
    "max_line_length",
    "no_todo",
    "validate_rule_handlers",
]
