#!/usr/bin/env python
import argparse
from pathlib import Path

from txtlint.ast import TxtNode
from txtlint.parser import is_markdown_path, parse_markdown, parse_text


def format_node(node: TxtNode, depth: int) -> str:
    start = node.loc.start
    end = node.loc.end
    base = (
        f"{'  ' * depth}{node.type} "
        f"range=({node.range.start},{node.range.end}) "
        f"loc={start.line}:{start.column}-{end.line}:{end.column} "
        f"raw={node.raw!r}"
    )

    # Add provider-specific details
    if node.data:
        base += " " + " ".join(f"{key}={value!r}" for key, value in node.data.items())
    if node.value is not None and node.is_leaf:
        base += f" value={node.value!r}"
    return base


def write_tree(root: TxtNode, lines: list[str]) -> None:
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        lines.append(format_node(node, depth))
        stack.extend((child, depth + 1) for child in reversed(node.children))


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the lint AST of a text or markdown file")
    parser.add_argument("path", type=Path)
    parser.add_argument("--output", type=Path, default=None, help="Write to a file instead of stdout")
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8")
    root = parse_markdown(text) if is_markdown_path(args.path) else parse_text(text)

    lines: list[str] = []
    write_tree(root, lines)

    if args.output is None:
        print("\n".join(lines))
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    print(f"Wrote {len(lines)} nodes to {args.output}")


if __name__ == "__main__":
    main()
