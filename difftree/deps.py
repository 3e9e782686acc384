from fastapi import Query

from difftree.core.auth import require_api_key
from difftree.core.changes import FilterConfig


def filter_config_query(
    include_renamed: bool = Query(default=True),
    include_modified: bool = Query(default=True),
    include_additions: bool = Query(default=True),
    include_deletions: bool = Query(default=True),
    include_add_del: bool = Query(default=True, description="Paths holding both an addition and a deletion"),
) -> FilterConfig:
    return FilterConfig(
        include_renamed=include_renamed,
        include_modified=include_modified,
        include_additions=include_additions,
        include_deletions=include_deletions,
        include_add_del=include_add_del,
    )


__all__ = ["filter_config_query", "require_api_key"]
