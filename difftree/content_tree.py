from __future__ import annotations

from typing import Any

from difftree.core.changes import RENAMED, ChangeRecord
from difftree.core.hierarchy import HierarchyNode, count, descendant_counts, iter_post_order


def change_to_dict(record: ChangeRecord) -> dict[str, Any]:
    return {"change": record.kind, "moved_to": record.moved_to}


def _changes_to_list(node: HierarchyNode) -> list[dict[str, Any]] | None:
    return None if node.changes is None else [change_to_dict(c) for c in node.changes]


def tree_to_dict(node: HierarchyNode) -> dict[str, Any]:
    counts = descendant_counts(node)
    built: dict[int, dict[str, Any]] = {}
    for current in iter_post_order(node):
        built[id(current)] = {
            "count": counts[id(current)],
            "changes": _changes_to_list(current),
            "children": {key: built.pop(id(current.children[key])) for key in sorted(current.children)},
        }
    return built[id(node)]


def tree_to_nodes(node: HierarchyNode) -> list[dict[str, Any]]:
    """Flat pre-order listing; ``path`` is ``""`` for the root, ``/seg/...`` below it."""
    counts = descendant_counts(node)
    out: list[dict[str, Any]] = []
    stack = [("", node)]
    while stack:
        path, current = stack.pop()
        out.append({"path": path, "count": counts[id(current)], "changes": _changes_to_list(current)})
        stack.extend(
            (f"{path}/{key}", current.children[key]) for key in sorted(current.children, reverse=True)
        )
    return out


def _change_marker(record: ChangeRecord) -> str:
    if record.kind == RENAMED and record.moved_to is not None:
        return f" {record.kind} -> {record.moved_to}"
    return f" {record.kind}"


def node_label(key: str, node: HierarchyNode, child_count: int | None = None) -> str:
    if child_count is None:
        child_count = count(node)
    label = key
    if node.children:
        label += "/"
    if child_count > 0:
        label += f" {child_count}"
    return label + "".join(_change_marker(c) for c in node.changes or ())


def render_tree_text(tree: HierarchyNode) -> str:
    counts = descendant_counts(tree)
    lines = ["." + "".join(_change_marker(c) for c in tree.changes or ())]

    def _entries(node: HierarchyNode, prefix: str) -> list[tuple[str, HierarchyNode, str, bool]]:
        keys = sorted(node.children)
        entries = [(key, node.children[key], prefix, idx == len(keys) - 1) for idx, key in enumerate(keys)]
        return entries[::-1]

    stack = _entries(tree, "")
    while stack:
        key, child, prefix, is_last = stack.pop()
        branch = "`-- " if is_last else "|-- "
        lines.append(f"{prefix}{branch}{node_label(key, child, counts[id(child)])}")
        child_prefix = f"{prefix}{'    ' if is_last else '|   '}"
        stack.extend(_entries(child, child_prefix))
    return "\n".join(lines)
