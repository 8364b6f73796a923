"""Concrete syntax tree produced by the parser."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO


@dataclass
class SyntaxTreeNode:
    """A named node of the concrete syntax tree with ordered children."""

    name: str = ""
    children: list[SyntaxTreeNode] = field(default_factory=list)

    @property
    def children_num(self) -> int:
        return len(self.children)

    def add_child(self, child: SyntaxTreeNode) -> int:
        """Append a child and return the new number of children."""
        if child is None:
            raise ValueError("cannot add a missing child node")
        self.children.append(child)
        return len(self.children)

    def format(self, level: int = 0) -> str:
        """Render this node and its descendants, indented by ``level``."""
        marker = "+" if self.children else "*"
        lines = [f"{'|  ' * level}>--{marker} {self.name}\n"]
        lines.extend(child.format(level + 1) for child in self.children)
        return "".join(lines)


@dataclass
class SyntaxTree:
    """A syntax tree with an optional root node."""

    root: SyntaxTreeNode | None = None

    def format(self) -> str:
        """Render the whole tree as text."""
        return self.root.format(0) if self.root is not None else ""

    def write(self, stream: TextIO | None = None) -> None:
        """Write the rendered tree to ``stream`` (standard output by default)."""
        (stream if stream is not None else sys.stdout).write(self.format())


def node(name: str, *args: SyntaxTreeNode | str) -> SyntaxTreeNode:
    """Build a node; string arguments become leaf children."""
    result = SyntaxTreeNode(name)
    for arg in args:
        result.add_child(SyntaxTreeNode(arg) if isinstance(arg, str) else arg)
    return result