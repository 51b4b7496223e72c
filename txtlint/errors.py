"""Exceptions raised by the lint core."""

from __future__ import annotations


class TxtlintError(Exception):
    """Base class for errors raised by txtlint itself."""


class RuleConfigurationError(TxtlintError, ValueError):
    """A rule could not be loaded: missing factory, failing factory or bad handlers."""

    def __init__(self, message: str, *, rule_id: str) -> None:
        super().__init__(message)
        self.rule_id = rule_id


class LintStateError(TxtlintError, RuntimeError):
    """Session state was used outside of (or re-entered during) a lint call."""
