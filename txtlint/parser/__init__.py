"""AST providers for plain text and markdown documents."""

from txtlint.parser.builder import NodeBuilder
from txtlint.parser.markdown import parse_markdown
from txtlint.parser.plaintext import parse_text
from txtlint.parser.providers import (
    MARKDOWN_EXTENSIONS,
    MARKDOWN_PROVIDER,
    PLAIN_TEXT_PROVIDER,
    AstProvider,
    ParserProvider,
    is_markdown_path,
)

__all__ = [
    "MARKDOWN_EXTENSIONS",
    "MARKDOWN_PROVIDER",
    "PLAIN_TEXT_PROVIDER",
    "AstProvider",
    "NodeBuilder",
    "ParserProvider",
    "is_markdown_path",
    "parse_markdown",
    "parse_text",
]
