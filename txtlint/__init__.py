"""Single-document text and markdown lint core."""

from txtlint.ast import TxtNode, TxtNodeType
from txtlint.config import TextLintConfig
from txtlint.diagnostics import Diagnostic, RuleError
from txtlint.errors import LintStateError, RuleConfigurationError, TxtlintError
from txtlint.lint import BUILTIN_RULES, RuleContext, RuleFactory, RuleHandlers, TextLintEngine
from txtlint.pipeline import LintResult, lint_file, lint_markdown, lint_text

__all__ = [
    "BUILTIN_RULES",
    "Diagnostic",
    "LintResult",
    "LintStateError",
    "RuleConfigurationError",
    "RuleContext",
    "RuleError",
    "RuleFactory",
    "RuleHandlers",
    "TextLintConfig",
    "TextLintEngine",
    "TxtNode",
    "TxtNodeType",
    "TxtlintError",
    "lint_file",
    "lint_markdown",
    "lint_text",
]
