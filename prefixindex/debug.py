"""Human-readable dumps of a prefix index's internal structure."""

from __future__ import annotations

import sys
from typing import IO, Iterator

from prefixindex.tree import Node, PrefixIndex


def _node_line(node: Node, level: int) -> str:
    return (
        f"{'  ' * level}Node: term={node.terminal} desc={node.descendant_count} "
        f"key={node.stored_key!r} value={node.value!r}"
    )


def iter_dump(index: PrefixIndex) -> Iterator[str]:
    """Yield one line per node and per edge, indented by depth.

    Each edge line is followed by the dump of the subtree it leads to.
    """
    yield _node_line(index.root, 0)
    # (edge header, subtree root, subtree depth)
    stack: list[tuple[str, Node, int]] = []
    for i, edge in reversed(list(enumerate(index.root.edges))):
        stack.append((f" Link {i}: s={edge.label}", edge.target, 1))
    while stack:
        header, node, level = stack.pop()
        yield f"{'  ' * (level - 1)}{header}"
        yield _node_line(node, level)
        for i, edge in reversed(list(enumerate(node.edges))):
            stack.append((f" Link {i}: s={edge.label}", edge.target, level + 1))


def dump(index: PrefixIndex, stream: IO[str] | None = None) -> None:
    """Write :func:`iter_dump` output to *stream* (stdout by default)."""
    out = stream if stream is not None else sys.stdout
    for line in iter_dump(index):
        print(line, file=out)
