"""Lint result carriers handed to callers and external formatters."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

from txtlint.diagnostics import Diagnostic, has_errors

TEXT_FILE_PATH: Final[str] = "<text>"
MARKDOWN_FILE_PATH: Final[str] = "<markdown>"


@dataclass(frozen=True, slots=True)
class LintResult:
    """Diagnostics of one document, in discovery order."""

    file_path: str
    messages: tuple[Diagnostic, ...]

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self.messages

    @property
    def has_errors(self) -> bool:
        return has_errors(self.messages)

    @property
    def error_count(self) -> int:
        return sum(1 for message in self.messages if message.severity == "error")

    def with_file_path(self, file_path: str) -> LintResult:
        return replace(self, file_path=file_path)

    def to_dict(self) -> dict[str, object]:
        return {
            "filePath": self.file_path,
            "messages": [message.to_dict() for message in self.messages],
        }
