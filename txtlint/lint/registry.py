"""Rule registration and teardown."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
import logging
from typing import TypeAlias

from txtlint.config import TextLintConfig
from txtlint.errors import RuleConfigurationError
from txtlint.lint.context import RuleContext
from txtlint.lint.events import EventDispatcher
from txtlint.lint.rules import (
    RuleFactory,
    RuleHandlers,
    RuleOptions,
    RulesConfig,
    is_disabled,
    validate_rule_handlers,
)

logger = logging.getLogger(__name__)

ContextFactory: TypeAlias = Callable[[str, TextLintConfig], RuleContext]


@dataclass(frozen=True, slots=True)
class RuleEntry:
    """One live rule: its id, the handlers it subscribed and its options."""

    rule_id: str
    handlers: RuleHandlers
    options: RuleOptions


class RuleRegistry:
    """Instantiates rules and wires their handlers into a dispatcher.

    Each `setup_rules` call is atomic: if any rule of the call fails to
    load, the subscriptions made by that call are removed before the error
    propagates. Rules from earlier calls stay registered.
    """

    __slots__ = ("_dispatcher", "_entries")

    def __init__(self, dispatcher: EventDispatcher) -> None:
        self._dispatcher = dispatcher
        self._entries: dict[str, RuleEntry] = {}

    @property
    def entries(self) -> tuple[RuleEntry, ...]:
        return tuple(self._entries.values())

    @property
    def rule_ids(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RuleEntry]:
        return iter(self.entries)

    def setup_rules(
        self,
        rules: Mapping[str, RuleFactory],
        rules_config: RulesConfig | None = None,
        config: TextLintConfig | None = None,
        *,
        context_factory: ContextFactory,
    ) -> tuple[RuleEntry, ...]:
        resolved_config = config if config is not None else TextLintConfig()
        merged_options: dict[str, RuleOptions] = dict(resolved_config.rules_config)
        if rules_config is not None:
            merged_options.update(rules_config)

        added: list[RuleEntry] = []
        try:
            for rule_id, factory in rules.items():
                entry = self._load_rule(
                    rule_id,
                    factory,
                    merged_options.get(rule_id),
                    resolved_config,
                    context_factory,
                )
                if entry is not None:
                    added.append(entry)
        except Exception:
            for entry in reversed(added):
                self._remove(entry)
            raise
        return tuple(added)

    def _load_rule(
        self,
        rule_id: str,
        factory: RuleFactory,
        options: RuleOptions,
        config: TextLintConfig,
        context_factory: ContextFactory,
    ) -> RuleEntry | None:
        if not callable(factory):
            raise RuleConfigurationError(f"Definition for rule '{rule_id}' was not found.", rule_id=rule_id)
        if rule_id in self._entries:
            raise RuleConfigurationError(f"Rule '{rule_id}' is already registered.", rule_id=rule_id)
        if is_disabled(options):
            logger.debug("skip disabled rule '%s'", rule_id)
            return None

        logger.debug("use '%s' rule", rule_id)
        try:
            handlers = factory(context_factory(rule_id, config), options)
        except Exception as exc:
            raise RuleConfigurationError(
                f"Error while loading rule '{rule_id}': {exc}",
                rule_id=rule_id,
            ) from exc
        handlers = dict(validate_rule_handlers(rule_id, handlers))

        entry = RuleEntry(rule_id=rule_id, handlers=handlers, options=options)
        for key, handler in handlers.items():
            self._dispatcher.subscribe(key, handler)
        self._entries[rule_id] = entry
        return entry

    def _remove(self, entry: RuleEntry) -> None:
        for key, handler in entry.handlers.items():
            self._dispatcher.unsubscribe(key, handler)
        self._entries.pop(entry.rule_id, None)

    def reset(self) -> None:
        """Drop every rule and every subscription. Safe to call repeatedly."""
        self._dispatcher.unsubscribe_all()
        self._entries.clear()
