"""AST providers and the markdown/plain-text file classification."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import os
from typing import Final, Protocol

from txtlint.ast import TxtNode
from txtlint.parser.markdown import parse_markdown
from txtlint.parser.plaintext import parse_text

MARKDOWN_EXTENSIONS: Final[tuple[str, ...]] = (
    ".md",
    ".markdown",
    ".mdown",
    ".mkdn",
    ".mkd",
    ".mdwn",
    ".mkdown",
    ".ron",
)


class AstProvider(Protocol):
    """Turns raw document text into a `Document` root node."""

    @property
    def name(self) -> str: ...

    def parse(self, text: str) -> TxtNode: ...


@dataclass(frozen=True, slots=True)
class ParserProvider:
    name: str
    parser: Callable[[str], TxtNode]

    def parse(self, text: str) -> TxtNode:
        return self.parser(text)


PLAIN_TEXT_PROVIDER: Final[AstProvider] = ParserProvider(name="text", parser=parse_text)
MARKDOWN_PROVIDER: Final[AstProvider] = ParserProvider(name="markdown", parser=parse_markdown)


def is_markdown_path(path: str | os.PathLike[str], extensions: Iterable[str] = MARKDOWN_EXTENSIONS) -> bool:
    suffix = os.path.splitext(os.fspath(path))[1].lower()
    return suffix in {extension.lower() for extension in extensions}
