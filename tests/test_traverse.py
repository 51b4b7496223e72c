from txtlint.ast import Traverser, TxtNode, TxtNodeType, VisitorOption, iter_nodes, traverse
from txtlint.parser import NodeBuilder, parse_markdown, parse_text


class _Recorder:
    def __init__(self, options: dict[str, VisitorOption] | None = None) -> None:
        self.events: list[str] = []
        self._options = options or {}

    def enter(self, node: TxtNode, parent: TxtNode | None) -> VisitorOption | None:
        self.events.append(f"enter {node.type}")
        return self._options.get(node.type)

    def leave(self, node: TxtNode, parent: TxtNode | None) -> None:
        self.events.append(f"leave {node.type}")


def test_enter_and_leave_follow_document_order() -> None:
    recorder = _Recorder()

    traverse(parse_text("Hello world."), recorder)

    assert recorder.events == [
        "enter Document",
        "enter Paragraph",
        "enter Str",
        "leave Str",
        "leave Paragraph",
        "leave Document",
    ]


def test_parent_is_passed_to_callbacks() -> None:
    root = parse_text("one\ntwo\n")
    parents: dict[str, str | None] = {}

    class _ParentRecorder:
        def enter(self, node: TxtNode, parent: TxtNode | None) -> None:
            parents[node.raw] = parent.type if parent is not None else None

        def leave(self, node: TxtNode, parent: TxtNode | None) -> None:
            return None

    traverse(root, _ParentRecorder())

    assert parents["one\ntwo\n"] is None
    assert parents["one\ntwo"] == "Document"
    assert parents["one"] == "Paragraph"
    assert parents["\n"] == "Paragraph"


def test_skip_omits_children_but_still_leaves() -> None:
    recorder = _Recorder({"Paragraph": VisitorOption.SKIP})

    traverse(parse_text("Hello world."), recorder)

    assert recorder.events == [
        "enter Document",
        "enter Paragraph",
        "leave Paragraph",
        "leave Document",
    ]


def test_break_stops_without_further_callbacks() -> None:
    recorder = _Recorder({"Str": VisitorOption.BREAK})
    traverser = Traverser()

    traverser.traverse(parse_text("first\n\nsecond"), recorder)

    assert recorder.events == [
        "enter Document",
        "enter Paragraph",
        "enter Str",
    ]
    assert traverser.broken is True


def test_iter_nodes_is_pre_order() -> None:
    root = parse_markdown("# Title\n\n*a* b\n")

    assert [node.type for node in iter_nodes(root)] == [
        "Document",
        "Header",
        "Str",
        "Paragraph",
        "Emphasis",
        "Str",
        "Str",
    ]


def test_deep_trees_are_walked_without_recursion() -> None:
    builder = NodeBuilder("x")
    node = builder.node(TxtNodeType.STR, 0, 1, value="x")
    for _ in range(5000):
        node = builder.node(TxtNodeType.BLOCK_QUOTE, 0, 1, children=(node,))

    recorder = _Recorder()
    traverse(node, recorder)

    assert len(recorder.events) == 2 * 5001
    assert recorder.events[:2] == ["enter BlockQuote", "enter BlockQuote"]
    assert recorder.events[5000:5002] == ["enter Str", "leave Str"]
    assert recorder.events[-1] == "leave BlockQuote"
    assert sum(1 for _ in iter_nodes(node)) == 5001
