"""Diagnostics."""

from txtlint.diagnostics.diagnostic import ERROR, Diagnostic, RuleError, Severity
from txtlint.diagnostics.report import diagnostics_by_rule, has_errors

__all__ = [
    "ERROR",
    "Diagnostic",
    "RuleError",
    "Severity",
    "diagnostics_by_rule",
    "has_errors",
]
