"""Single-document lint engine.

Usage:

1. register rules with `TextLintEngine.setup_rules`,
2. lint documents with `lint_text`, `lint_markdown` or `lint_file`
   (as often as needed while the rules stay registered),
3. tear down with `reset_rules`.

One engine lints one document at a time. Rule handlers keep their own
per-document state, so concurrent lints need one engine each; a second lint
call on a busy engine raises `LintStateError`.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import os
from pathlib import Path
import threading

from txtlint.ast import Traverser, TxtNode
from txtlint.config import TextLintConfig
from txtlint.diagnostics import RuleError
from txtlint.errors import LintStateError
from txtlint.lint.context import RuleContext
from txtlint.lint.events import EventDispatcher, exit_key
from txtlint.lint.registry import RuleEntry, RuleRegistry
from txtlint.lint.rules import RuleFactory, RulesConfig
from txtlint.lint.session import LintSession
from txtlint.parser import MARKDOWN_PROVIDER, PLAIN_TEXT_PROVIDER, AstProvider, is_markdown_path
from txtlint.pipeline.results import MARKDOWN_FILE_PATH, TEXT_FILE_PATH, LintResult

logger = logging.getLogger(__name__)


class _SessionVisitor:
    __slots__ = ("_session", "_dispatcher")

    def __init__(self, session: LintSession, dispatcher: EventDispatcher) -> None:
        self._session = session
        self._dispatcher = dispatcher

    def enter(self, node: TxtNode, parent: TxtNode | None) -> None:
        self._session.record_parent(node, parent)
        self._dispatcher.publish(node.type, node)

    def leave(self, node: TxtNode, parent: TxtNode | None) -> None:
        self._dispatcher.publish(exit_key(node.type), node)


class TextLintEngine:
    def __init__(
        self,
        config: TextLintConfig | None = None,
        *,
        text_provider: AstProvider = PLAIN_TEXT_PROVIDER,
        markdown_provider: AstProvider = MARKDOWN_PROVIDER,
    ) -> None:
        self._config = config if config is not None else TextLintConfig()
        self._text_provider = text_provider
        self._markdown_provider = markdown_provider
        self._dispatcher = EventDispatcher()
        self._registry = RuleRegistry(self._dispatcher)
        self._session: LintSession | None = None
        self._busy = threading.Lock()

    @property
    def config(self) -> TextLintConfig:
        return self._config

    @property
    def rules(self) -> tuple[RuleEntry, ...]:
        return self._registry.entries

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    @property
    def session(self) -> LintSession | None:
        """The lint call in progress, if any."""
        return self._session

    # ===== rule lifecycle

    def setup_rules(
        self,
        rules: Mapping[str, RuleFactory],
        rules_config: RulesConfig | None = None,
        config: TextLintConfig | None = None,
    ) -> tuple[RuleEntry, ...]:
        """Register rules; release them with `reset_rules`.

        A rule whose `rules_config` entry is `False` is skipped.
        """
        return self._registry.setup_rules(
            rules,
            rules_config,
            config if config is not None else self._config,
            context_factory=self._new_context,
        )

    def reset_rules(self) -> None:
        """Remove every registered rule and drop any session state."""
        self._registry.reset()
        self._session = None

    def _new_context(self, rule_id: str, config: TextLintConfig) -> RuleContext:
        return RuleContext(rule_id, self, config)

    # ===== linting

    def lint_text(self, text: str) -> LintResult:
        """Lint plain text with the registered rules."""
        return self.lint(text, markdown=False)

    def lint_markdown(self, markdown: str) -> LintResult:
        """Lint markdown text with the registered rules."""
        return self.lint(markdown, markdown=True)

    def lint_file(self, file_path: str | os.PathLike[str]) -> LintResult:
        """Lint a file; markdown or plain text is chosen by extension.

        The result's `file_path` is the resolved absolute path.
        """
        absolute_path = self._config.resolve_path(file_path)
        text = Path(absolute_path).read_bytes().decode(self._config.encoding)
        markdown = is_markdown_path(absolute_path, self._config.markdown_extensions)
        return self.lint(text, markdown=markdown).with_file_path(absolute_path)

    def lint(self, text: str, *, markdown: bool) -> LintResult:
        if not text:
            raise ValueError("Cannot lint empty text")
        provider = self._markdown_provider if markdown else self._text_provider
        file_path = MARKDOWN_FILE_PATH if markdown else TEXT_FILE_PATH

        if not self._busy.acquire(blocking=False):
            raise LintStateError("A lint call is already running on this engine")
        session = LintSession(text)
        self._session = session
        try:
            logger.debug("lint %s document (%d chars, %d rules)", provider.name, len(text), len(self._registry))
            root = provider.parse(text)
            Traverser().traverse(root, _SessionVisitor(session, self._dispatcher))
        finally:
            self._session = None
            self._busy.release()

        logger.debug("lint finished with %d diagnostics", len(session.diagnostics))
        return LintResult(file_path=file_path, messages=session.diagnostics)

    # ===== channel used by rule handles

    def report(self, rule_id: str, node: TxtNode, error: RuleError) -> None:
        session = self._session
        if session is None:
            raise LintStateError(f"Rule '{rule_id}' reported outside of a lint call")
        session.report(rule_id, node, error)

    def get_source(
        self,
        node: TxtNode | None = None,
        before_count: int = 0,
        after_count: int = 0,
    ) -> str | None:
        session = self._session
        if session is None:
            return None
        return session.get_source(node, before_count, after_count)

    def get_parent(self, node: TxtNode) -> TxtNode | None:
        session = self._session
        if session is None:
            return None
        return session.parent_of(node)
