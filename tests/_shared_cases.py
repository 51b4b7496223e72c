"""Centralized document cases used across parser/engine tests."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap


@dataclass(frozen=True, slots=True)
class DocumentCase:
    name: str
    source: str
    markdown: bool = False


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


TEXT_CASES: tuple[DocumentCase, ...] = (
    DocumentCase(name="single_sentence", source="Hello world."),
    DocumentCase(name="two_paragraphs", source="First line.\nSecond line.\n\nNext paragraph.\n"),
    DocumentCase(name="crlf_lines", source="alpha\r\nbeta\r\n\r\ngamma"),
    DocumentCase(name="lone_cr_lines", source="one\rtwo\r"),
    DocumentCase(name="leading_blank_lines", source="\n\n  indented text\n"),
    DocumentCase(name="only_newline", source="\n"),
)

MARKDOWN_CASES: tuple[DocumentCase, ...] = (
    DocumentCase(
        name="header_and_paragraph",
        source=_dedent(
            """
            # Title

            Some *emphasis* and **strong** text with `code`.
            """
        ),
        markdown=True,
    ),
    DocumentCase(
        name="lists",
        source=_dedent(
            """
            - first item
            - second item
              continued
            - [ ] open task

            1. one
            2. two
            """
        ),
        markdown=True,
    ),
    DocumentCase(
        name="block_quote_and_link",
        source=_dedent(
            """
            > quoted [link](https://example.com "Example") text
            > second line

            after the quote
            """
        ),
        markdown=True,
    ),
    DocumentCase(
        name="code_blocks",
        source=_dedent(
            """
            ```python
            print("TODO: not a todo")
            ```

                indented code

            ***
            """
        ),
        markdown=True,
    ),
    DocumentCase(
        name="setext_and_html",
        source=_dedent(
            """
            Heading
            =======

            <div>
            html block
            </div>
            """
        ),
        markdown=True,
    ),
    DocumentCase(name="unclosed_markers", source="a *b and `c and [d](e\n", markdown=True),
)

ALL_CASES: tuple[DocumentCase, ...] = (*TEXT_CASES, *MARKDOWN_CASES)


def case_id(case: DocumentCase) -> str:
    return case.name
