"""Outline document tree: an arena of nodes addressed by index."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class NodeKind(str, Enum):
    DOCUMENT = "document"
    HEADLINE = "headline"


@dataclass(frozen=True)
class Bound:
    """One end of a timestamp. Date and time parts are independently optional."""

    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None


@dataclass(frozen=True)
class TimeRange:
    """A timestamp value: a single stamp has ``end == start``."""

    start: Bound = field(default_factory=Bound)
    end: Bound = field(default_factory=Bound)


@dataclass
class Node:
    kind: NodeKind
    parent: int | None = None
    children: list[int] = field(default_factory=list)

    # Headline metadata
    title: str = ""
    level: int | None = None
    priority: int | None = None
    tags: list[str] = field(default_factory=list)
    todo_keyword: str = ""
    todo_type: str | None = None  # "todo" | "done"
    scheduled: TimeRange | None = None
    deadline: TimeRange | None = None
    closed: TimeRange | None = None

    @property
    def is_headline(self) -> bool:
        return self.kind == NodeKind.HEADLINE


@dataclass
class OrgDocument:
    """A parsed source document.

    ``nodes[0]`` is always the document root. ``title`` and ``category`` are
    document-level lookups kept for callers; they do not appear in the export.
    """

    source: str = ""
    title: str = ""
    category: str = ""
    todo_keywords: list[str] = field(default_factory=lambda: ["TODO"])
    done_keywords: list[str] = field(default_factory=lambda: ["DONE"])
    nodes: list[Node] = field(default_factory=lambda: [Node(kind=NodeKind.DOCUMENT)])

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def add(self, node: Node, parent: int = 0) -> int:
        """Append *node* under *parent* and return its index."""
        index = len(self.nodes)
        node.parent = parent
        self.nodes.append(node)
        self.nodes[parent].children.append(index)
        return index

    def walk(self) -> Iterator[tuple[int, Node]]:
        """Yield ``(index, node)`` for every headline, depth-first pre-order."""
        stack = list(reversed(self.root.children))
        while stack:
            index = stack.pop()
            node = self.nodes[index]
            if node.is_headline:
                yield index, node
            stack.extend(reversed(node.children))

    def nearest_headline(self, index: int) -> Node | None:
        """Return the closest strict ancestor that is a headline, if any."""
        parent = self.nodes[index].parent
        while parent is not None:
            node = self.nodes[parent]
            if node.is_headline:
                return node
            parent = node.parent
        return None

    def headlines(self) -> list[Node]:
        return [node for _, node in self.walk()]
