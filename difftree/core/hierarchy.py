from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from difftree.core.changes import ChangeRecord
from difftree.core.errors import path_not_absolute
from difftree.core.parser import iter_diff_lines


@dataclass
class HierarchyNode:
    """One path segment of the change tree.

    ``changes`` stays ``None`` on nodes that no input path ends at.
    """

    children: dict[str, HierarchyNode] = field(default_factory=dict)
    changes: list[ChangeRecord] | None = None

    def get_child(self, segment: str) -> HierarchyNode:
        child = self.children.get(segment)
        if child is None:
            child = HierarchyNode()
            self.children[segment] = child
        return child

    def add_change(self, record: ChangeRecord) -> None:
        if self.changes is None:
            self.changes = []
        self.changes.append(record)

    def is_empty(self) -> bool:
        return not self.children and not self.changes


def add_path(root: HierarchyNode, path: str, record: ChangeRecord) -> HierarchyNode:
    """Attach ``record`` at ``path`` below ``root`` and return the node it landed on."""
    if not path.startswith("/"):
        raise path_not_absolute(path)

    segments = path.split("/")[1:]
    # a trailing slash attaches to the node reached so far
    if segments and segments[-1] == "":
        segments.pop()

    current = root
    for segment in segments:
        current = current.get_child(segment)
    current.add_change(record)
    return current


def build_hierarchy(pairs: Iterable[tuple[ChangeRecord, str]]) -> HierarchyNode:
    root = HierarchyNode()
    for record, path in pairs:
        add_path(root, path, record)
    return root


def build_from_text(source: str | Iterable[str]) -> HierarchyNode:
    return build_hierarchy(iter_diff_lines(source))


def iter_post_order(root: HierarchyNode) -> Iterator[HierarchyNode]:
    """Yield every node of the subtree, children before their parent."""
    stack: list[tuple[HierarchyNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in node.children.values())


def descendant_counts(root: HierarchyNode) -> dict[int, int]:
    """``count`` for every node of the subtree, keyed by ``id(node)``."""
    counts: dict[int, int] = {}
    for node in iter_post_order(root):
        counts[id(node)] = sum(
            counts[id(child)] + (1 if child.changes else 0) for child in node.children.values()
        )
    return counts


def count(node: HierarchyNode) -> int:
    """Number of descendants carrying at least one change, not counting ``node``."""
    return descendant_counts(node)[id(node)]


def total_changes(node: HierarchyNode) -> int:
    return sum(len(n.changes or ()) for n in iter_post_order(node))


def depth(node: HierarchyNode) -> int:
    """Number of segments on the longest path below ``node``."""
    deepest = 0
    stack = [(node, 0)]
    while stack:
        current, level = stack.pop()
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for child in current.children.values())
    return deepest


def walk(node: HierarchyNode, prefix: str = "") -> Iterator[tuple[str, HierarchyNode]]:
    """Yield ``(path, node)`` for every descendant, depth-first, sorted by segment."""
    stack = [(f"{prefix}/{key}", node.children[key]) for key in sorted(node.children, reverse=True)]
    while stack:
        path, current = stack.pop()
        yield path, current
        stack.extend(
            (f"{path}/{key}", current.children[key]) for key in sorted(current.children, reverse=True)
        )
