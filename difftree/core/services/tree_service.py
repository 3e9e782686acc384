from __future__ import annotations

import logging
import os
import uuid
from collections import Counter, OrderedDict
from collections.abc import Iterable

from difftree.content_tree import tree_to_dict, tree_to_nodes
from difftree.core.changes import FilterConfig
from difftree.core.errors import APIError, FormatError
from difftree.core.hierarchy import HierarchyNode, build_from_text, depth, total_changes, walk
from difftree.core.pruner import prune_tree
from difftree.log_utils import log_event


MAX_TREES_DEFAULT = 32
MAX_NESTED_DEPTH_DEFAULT = 100

# In-process store: tree id -> built (unpruned) tree, oldest first
_TREES: OrderedDict[str, HierarchyNode] = OrderedDict()


def max_trees() -> int:
    raw = os.getenv("DIFFTREE_MAX_TREES", "")
    try:
        value = int(raw)
    except ValueError:
        return MAX_TREES_DEFAULT
    return value if value > 0 else MAX_TREES_DEFAULT


def max_nested_depth() -> int:
    raw = os.getenv("DIFFTREE_MAX_NESTED_DEPTH", "")
    try:
        value = int(raw)
    except ValueError:
        return MAX_NESTED_DEPTH_DEFAULT
    return value if value > 0 else MAX_NESTED_DEPTH_DEFAULT


def build_tree_from_text(source: str | Iterable[str]) -> HierarchyNode:
    try:
        root = build_from_text(source)
    except FormatError as e:
        log_event("build_failed", logging.WARNING, code=e.code, subject=e.subject)
        raise APIError(400, e.code, e.message, details={"subject": e.subject})
    log_event("tree_built", records=total_changes(root))
    return root


def summarize(root: HierarchyNode) -> dict:
    kinds: Counter[str] = Counter(c.kind for c in root.changes or ())
    changed_paths = 1 if root.changes else 0
    for _, node in walk(root):
        if node.changes:
            changed_paths += 1
            kinds.update(c.kind for c in node.changes)
    return {
        "record_count": sum(kinds.values()),
        "changed_paths": changed_paths,
        "kind_counts": dict(sorted(kinds.items())),
    }


def tree_payload(root: HierarchyNode, layout: str = "nested") -> dict:
    """Summary plus either the nested tree or the flat node list."""
    payload = {"summary": summarize(root)}
    if layout == "flat":
        payload["nodes"] = tree_to_nodes(root)
        return payload

    tree_depth = depth(root)
    limit = max_nested_depth()
    if tree_depth > limit:
        raise APIError(
            422,
            "tree_too_deep",
            f"tree is {tree_depth} segments deep; use layout=flat above {limit}",
            details={"depth": tree_depth, "max_depth": limit},
        )
    payload["tree"] = tree_to_dict(root)
    return payload


def store_tree(root: HierarchyNode) -> str:
    tree_id = uuid.uuid4().hex
    _TREES[tree_id] = root
    limit = max_trees()
    while len(_TREES) > limit:
        evicted, _ = _TREES.popitem(last=False)
        log_event("tree_evicted", tree_id=evicted)
    return tree_id


def get_tree(tree_id: str) -> HierarchyNode:
    root = _TREES.get(tree_id)
    if root is None:
        raise APIError(404, "not_found", f"Tree not found: {tree_id}")
    return root


def prune_stored_tree(tree_id: str, config: FilterConfig) -> HierarchyNode:
    pruned = prune_tree(get_tree(tree_id), config)
    log_event(
        "tree_pruned",
        tree_id=tree_id,
        filters=list(config.flags()),
        records=total_changes(pruned),
    )
    return pruned


def delete_tree(tree_id: str) -> None:
    if _TREES.pop(tree_id, None) is None:
        raise APIError(404, "not_found", f"Tree not found: {tree_id}")
    log_event("tree_deleted", tree_id=tree_id)


def clear_trees() -> None:
    _TREES.clear()
