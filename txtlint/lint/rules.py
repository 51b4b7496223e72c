"""Rule factory contract and handler validation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

from txtlint.errors import RuleConfigurationError
from txtlint.lint.events import EXIT_SUFFIX, NodeHandler

if TYPE_CHECKING:
    from txtlint.lint.context import RuleContext

RuleHandlers: TypeAlias = Mapping[str, NodeHandler]
RuleOptions: TypeAlias = Any
RulesConfig: TypeAlias = Mapping[str, RuleOptions]


class RuleFactory(Protocol):
    """Creates one rule instance for a registration.

    Receives the rule's handle and its configuration value (`None` when the
    rule has no entry in the rules config) and returns the handlers keyed
    by node type, or node type + `:exit` for the leave phase.
    """

    def __call__(self, context: RuleContext, options: RuleOptions, /) -> RuleHandlers: ...


def is_disabled(options: RuleOptions) -> bool:
    """`False` is the only value that turns a rule off; a missing entry keeps it on."""
    return options is False


def validate_rule_handlers(rule_id: str, handlers: object) -> RuleHandlers:
    if not isinstance(handlers, Mapping):
        raise RuleConfigurationError(
            f"Rule '{rule_id}' must return a mapping of node types to handlers, got {type(handlers).__name__}.",
            rule_id=rule_id,
        )
    for key, handler in handlers.items():
        if not isinstance(key, str) or not key or key == EXIT_SUFFIX:
            raise RuleConfigurationError(
                f"Rule '{rule_id}' has invalid event key {key!r}; expected a node type or '<type>{EXIT_SUFFIX}'.",
                rule_id=rule_id,
            )
        if EXIT_SUFFIX in key and not key.endswith(EXIT_SUFFIX):
            raise RuleConfigurationError(
                f"Rule '{rule_id}' has invalid event key {key!r}; '{EXIT_SUFFIX}' must end the key.",
                rule_id=rule_id,
            )
        if not callable(handler):
            raise RuleConfigurationError(
                f"Rule '{rule_id}' handler for '{key}' is not callable.",
                rule_id=rule_id,
            )
    return handlers
