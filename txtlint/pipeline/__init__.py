"""Lint result carriers and lazy one-shot entrypoint exports."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from txtlint.pipeline.results import MARKDOWN_FILE_PATH, TEXT_FILE_PATH, LintResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from txtlint.config import TextLintConfig
    from txtlint.lint.rules import RuleFactory, RulesConfig


def lint_text(
    text: str,
    *,
    rules: Mapping[str, RuleFactory],
    rules_config: RulesConfig | None = None,
    config: TextLintConfig | None = None,
) -> LintResult:
    from txtlint.pipeline.entrypoints import lint_text as _lint_text

    return _lint_text(text, rules=rules, rules_config=rules_config, config=config)


def lint_markdown(
    text: str,
    *,
    rules: Mapping[str, RuleFactory],
    rules_config: RulesConfig | None = None,
    config: TextLintConfig | None = None,
) -> LintResult:
    from txtlint.pipeline.entrypoints import lint_markdown as _lint_markdown

    return _lint_markdown(text, rules=rules, rules_config=rules_config, config=config)


def lint_file(
    file_path: str | os.PathLike[str],
    *,
    rules: Mapping[str, RuleFactory],
    rules_config: RulesConfig | None = None,
    config: TextLintConfig | None = None,
) -> LintResult:
    from txtlint.pipeline.entrypoints import lint_file as _lint_file

    return _lint_file(file_path, rules=rules, rules_config=rules_config, config=config)


__all__ = [
    "MARKDOWN_FILE_PATH",
    "TEXT_FILE_PATH",
    "LintResult",
    "lint_file",
    "lint_markdown",
    "lint_text",
]
