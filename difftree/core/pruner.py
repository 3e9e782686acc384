from __future__ import annotations

from difftree.core.changes import MODIFIED, RENAMED, ChangeRecord, FilterConfig
from difftree.core.hierarchy import HierarchyNode, iter_post_order


def is_add_del(changes: list[ChangeRecord] | None) -> bool:
    """True when the records hold both an addition and a deletion."""
    records = changes or ()
    return any(c.is_addition for c in records) and any(c.is_deletion for c in records)


def keep_change(record: ChangeRecord, config: FilterConfig, add_del: bool) -> bool:
    if record.kind == RENAMED:
        return config.include_renamed
    if record.kind == MODIFIED:
        return config.include_modified
    if record.is_addition or record.is_deletion:
        if add_del:
            return config.include_add_del
        return config.include_additions if record.is_addition else config.include_deletions
    return True


def filter_changes(changes: list[ChangeRecord] | None, config: FilterConfig) -> list[ChangeRecord]:
    if not changes:
        return []
    add_del = is_add_del(changes)
    return [c for c in changes if keep_change(c, config, add_del)]


def prune(node: HierarchyNode, config: FilterConfig) -> HierarchyNode | None:
    """Rebuild ``node`` with only surviving records; ``None`` when nothing survives."""
    # id(original) -> rebuilt node or None, filled children first
    rebuilt: dict[int, HierarchyNode | None] = {}
    for current in iter_post_order(node):
        children: dict[str, HierarchyNode] = {}
        for key, child in current.children.items():
            pruned = rebuilt.pop(id(child))
            if pruned is not None:
                children[key] = pruned

        changes = filter_changes(current.changes, config)
        if not changes and not children:
            rebuilt[id(current)] = None
        else:
            rebuilt[id(current)] = HierarchyNode(children=children, changes=changes or None)
    return rebuilt[id(node)]


def prune_tree(root: HierarchyNode, config: FilterConfig) -> HierarchyNode:
    pruned = prune(root, config)
    if pruned is None:
        return HierarchyNode(children={}, changes=[])
    return pruned
