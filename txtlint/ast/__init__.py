"""Document AST model and traversal."""

from txtlint.ast.model import TxtNode, TxtNodeType
from txtlint.ast.traverse import Traverser, Visitor, VisitorOption, iter_nodes, traverse

__all__ = [
    "Traverser",
    "TxtNode",
    "TxtNodeType",
    "Visitor",
    "VisitorOption",
    "iter_nodes",
    "traverse",
]
