from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from difftree.core.changes import FilterConfig


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    ok: bool


class FilterPayload(BaseModel):
    include_renamed: bool = True
    include_modified: bool = True
    include_additions: bool = True
    include_deletions: bool = True
    include_add_del: bool = Field(True, description="Paths holding both an addition and a deletion")

    def to_config(self) -> FilterConfig:
        return FilterConfig(
            include_renamed=self.include_renamed,
            include_modified=self.include_modified,
            include_additions=self.include_additions,
            include_deletions=self.include_deletions,
            include_add_del=self.include_add_del,
        )


class ChangeModel(BaseModel):
    change: str = Field(..., description="Single-character change kind, e.g. '+', '-', 'M', 'R'")
    moved_to: Optional[str] = None


class HierarchyNodeModel(BaseModel):
    count: int = Field(..., description="Descendants carrying at least one change")
    changes: Optional[list[ChangeModel]] = None
    children: dict[str, HierarchyNodeModel] = Field(default_factory=dict)


class FlatNodeModel(BaseModel):
    path: str = Field(..., description="\"\" for the root, otherwise \"/segment/...\"")
    count: int
    changes: Optional[list[ChangeModel]] = None


Layout = Literal["nested", "flat"]


class TreeSummary(BaseModel):
    record_count: int
    changed_paths: int
    kind_counts: dict[str, int]


class PreviewRequest(BaseModel):
    text: str = Field(..., description="Raw diff output, one record per line")
    filters: FilterPayload = Field(default_factory=FilterPayload)


class PreviewResponse(BaseModel):
    summary: TreeSummary
    tree: Optional[HierarchyNodeModel] = None
    nodes: Optional[list[FlatNodeModel]] = None


class TreeResponse(BaseModel):
    id: str
    summary: TreeSummary
    tree: Optional[HierarchyNodeModel] = None
    nodes: Optional[list[FlatNodeModel]] = None


class DeleteTreeResponse(BaseModel):
    ok: bool
    id: str


HierarchyNodeModel.model_rebuild()
