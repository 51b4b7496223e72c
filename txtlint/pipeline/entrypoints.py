"""One-shot entrypoints: register rules, lint one document, tear the rules down."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import os

from txtlint.config import TextLintConfig
from txtlint.lint.engine import TextLintEngine
from txtlint.lint.rules import RuleFactory, RulesConfig
from txtlint.pipeline.results import LintResult


def lint_text(
    text: str,
    *,
    rules: Mapping[str, RuleFactory],
    rules_config: RulesConfig | None = None,
    config: TextLintConfig | None = None,
) -> LintResult:
    """Lint plain text with a throwaway engine."""
    return _run_once(lambda engine: engine.lint_text(text), rules, rules_config, config)


def lint_markdown(
    text: str,
    *,
    rules: Mapping[str, RuleFactory],
    rules_config: RulesConfig | None = None,
    config: TextLintConfig | None = None,
) -> LintResult:
    """Lint markdown with a throwaway engine."""
    return _run_once(lambda engine: engine.lint_markdown(text), rules, rules_config, config)


def lint_file(
    file_path: str | os.PathLike[str],
    *,
    rules: Mapping[str, RuleFactory],
    rules_config: RulesConfig | None = None,
    config: TextLintConfig | None = None,
) -> LintResult:
    """Lint one file with a throwaway engine."""
    return _run_once(lambda engine: engine.lint_file(file_path), rules, rules_config, config)


def _run_once(
    run: Callable[[TextLintEngine], LintResult],
    rules: Mapping[str, RuleFactory],
    rules_config: RulesConfig | None,
    config: TextLintConfig | None,
) -> LintResult:
    engine = TextLintEngine(config)
    engine.setup_rules(rules, rules_config)
    try:
        return run(engine)
    finally:
        engine.reset_rules()
