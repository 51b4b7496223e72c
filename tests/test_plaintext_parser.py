import pytest

from txtlint.ast import TxtNode, TxtNodeType, iter_nodes
from txtlint.parser import PLAIN_TEXT_PROVIDER, parse_markdown, parse_text
from txtlint.text import LineIndex, Position
from tests._debug import debug_dump_ast
from tests._shared_cases import ALL_CASES, DocumentCase, case_id


def _types(node: TxtNode) -> list[str]:
    return [child.type for child in node.children]


def test_plain_text_single_sentence_shape() -> None:
    root = parse_text("Hello world.")
    debug_dump_ast(root)

    assert root.type == TxtNodeType.DOCUMENT
    assert root.range.as_tuple() == (0, 12)
    assert _types(root) == ["Paragraph"]

    paragraph = root.children[0]
    assert _types(paragraph) == ["Str"]
    text = paragraph.children[0]
    assert text.value == "Hello world."
    assert text.loc.start == Position(1, 0)
    assert text.loc.end == Position(1, 12)


def test_plain_text_lines_are_joined_by_breaks() -> None:
    root = parse_text("First line.\nSecond line.\n\nNext paragraph.\n")

    assert _types(root) == ["Paragraph", "Paragraph"]
    first, second = root.children
    assert _types(first) == ["Str", "Break", "Str"]
    assert [child.raw for child in first.children] == ["First line.", "\n", "Second line."]
    assert first.range.as_tuple() == (0, 24)
    assert second.children[0].value == "Next paragraph."
    assert second.loc.start == Position(4, 0)


def test_plain_text_crlf_break_covers_both_characters() -> None:
    root = parse_text("alpha\r\nbeta")

    paragraph = root.children[0]
    line_break = paragraph.children[1]
    assert line_break.type == TxtNodeType.BREAK
    assert line_break.raw == "\r\n"
    assert paragraph.children[2].loc.start == Position(2, 0)


def test_plain_text_blank_document_has_no_paragraphs() -> None:
    root = parse_text("\n  \n")

    assert root.children == ()
    assert root.range.as_tuple() == (0, 4)


def test_provider_wraps_plain_text_parser() -> None:
    assert PLAIN_TEXT_PROVIDER.name == "text"
    assert _types(PLAIN_TEXT_PROVIDER.parse("x")) == ["Paragraph"]


@pytest.mark.parametrize("case", ALL_CASES, ids=case_id)
def test_every_node_is_consistent_with_its_source(case: DocumentCase) -> None:
    root = parse_markdown(case.source) if case.markdown else parse_text(case.source)
    debug_dump_ast(root, label=case.name)
    index = LineIndex(case.source)

    assert root.range.as_tuple() == (0, len(case.source))
    for node in iter_nodes(root):
        start, end = node.range
        assert node.raw == case.source[start:end]
        assert node.loc.start == index.position_at(start)
        assert node.loc.end == index.position_at(end)

        previous_end = start
        for child in node.children:
            assert node.range.start <= child.range.start
            assert child.range.end <= node.range.end
            assert child.range.start >= previous_end
            previous_end = child.range.end
