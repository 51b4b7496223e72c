"""Engine configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from types import MappingProxyType

from txtlint.parser.providers import MARKDOWN_EXTENSIONS


@dataclass(frozen=True, slots=True)
class TextLintConfig:
    """Settings shared by every rule registered on one engine.

    `rules_config` holds default per-rule options; options passed to
    `setup_rules` take precedence over it.
    """

    cwd: str | None = None
    encoding: str = "utf-8"
    markdown_extensions: tuple[str, ...] = MARKDOWN_EXTENSIONS
    rules_config: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))

    @staticmethod
    def for_directory(path: str | os.PathLike[str]) -> "TextLintConfig":
        return TextLintConfig(cwd=os.fspath(path))

    def resolve_path(self, path: str | os.PathLike[str]) -> str:
        """Absolute, normalized form of `path` relative to `cwd` (or the process cwd)."""
        base = self.cwd if self.cwd is not None else os.getcwd()
        return os.path.abspath(os.path.join(base, os.fspath(path)))
