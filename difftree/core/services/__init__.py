from difftree.core.services.tree_service import (
    build_tree_from_text,
    clear_trees,
    delete_tree,
    get_tree,
    prune_stored_tree,
    store_tree,
    summarize,
)

__all__ = [
    "build_tree_from_text",
    "clear_trees",
    "delete_tree",
    "get_tree",
    "prune_stored_tree",
    "store_tree",
    "summarize",
]
