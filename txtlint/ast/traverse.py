"""Depth-first traversal controller with enter/leave callbacks."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Protocol

from txtlint.ast.model import TxtNode


class VisitorOption(Enum):
    """Values an `enter` callback may return to steer the walk."""

    SKIP = "skip"
    BREAK = "break"


class Visitor(Protocol):
    def enter(self, node: TxtNode, parent: TxtNode | None) -> VisitorOption | None: ...

    def leave(self, node: TxtNode, parent: TxtNode | None) -> None: ...


class Traverser:
    """Walks a tree in document order.

    `enter` runs before a node's children and `leave` after all of them,
    for every node including the root. `VisitorOption.SKIP` from `enter`
    skips the children (the node is still left); `VisitorOption.BREAK`
    stops the walk without any further callbacks.
    """

    __slots__ = ("_broken",)

    def __init__(self) -> None:
        self._broken = False

    def traverse(self, root: TxtNode, visitor: Visitor) -> None:
        self._broken = False
        stack: list[tuple[TxtNode, TxtNode | None, Iterator[TxtNode]]] = []

        def enter(node: TxtNode, parent: TxtNode | None) -> bool:
            option = visitor.enter(node, parent)
            if option is VisitorOption.BREAK:
                self._broken = True
                return False
            if option is VisitorOption.SKIP:
                visitor.leave(node, parent)
            else:
                stack.append((node, parent, iter(node.children)))
            return True

        if not enter(root, None):
            return
        while stack:
            node, parent, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                visitor.leave(node, parent)
            elif not enter(child, node):
                return

    @property
    def broken(self) -> bool:
        """Whether the last walk was stopped with `VisitorOption.BREAK`."""
        return self._broken


def traverse(root: TxtNode, visitor: Visitor) -> None:
    Traverser().traverse(root, visitor)


def iter_nodes(root: TxtNode) -> Iterator[TxtNode]:
    """Yield every node of the tree in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
