"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from txtlint.diagnostics.diagnostic import Diagnostic


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def diagnostics_by_rule(diagnostics: Iterable[Diagnostic]) -> dict[str, list[Diagnostic]]:
    grouped: dict[str, list[Diagnostic]] = {}
    for diagnostic in diagnostics:
        grouped.setdefault(diagnostic.rule_id, []).append(diagnostic)
    return grouped
