from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from difftree.content_tree import render_tree_text
from difftree.core.auth import require_api_key
from difftree.core.changes import FilterConfig
from difftree.core.errors import APIError
from difftree.core.hierarchy import HierarchyNode
from difftree.core.pruner import prune_tree
from difftree.core.services.tree_service import (
    build_tree_from_text,
    delete_tree,
    prune_stored_tree,
    store_tree,
    tree_payload,
)
from difftree.deps import filter_config_query
from difftree.models import (
    DeleteTreeResponse,
    ErrorResponse,
    Layout,
    PreviewRequest,
    PreviewResponse,
    TreeResponse,
)
from difftree.upload_utils import filter_config_from_form, read_upload_utf8, validate_upload_file

router = APIRouter(
    prefix="/trees",
    tags=["trees"],
    dependencies=[Depends(require_api_key)],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def _tree_response(tree_id: str, pruned: HierarchyNode, layout: Layout) -> TreeResponse:
    return TreeResponse(id=tree_id, **tree_payload(pruned, layout))


def _build_and_store(text: str, config: FilterConfig, layout: Layout) -> TreeResponse:
    tree_id = store_tree(build_tree_from_text(text))
    try:
        return _tree_response(tree_id, prune_stored_tree(tree_id, config), layout)
    except APIError:
        # no id reaches the client
        delete_tree(tree_id)
        raise


@router.post(
    "",
    response_model=TreeResponse,
    responses=ERROR_RESPONSES,
    summary="Upload diff output and build a change tree",
    description="Accepts multipart/form-data with a diff file and optional filter flags.",
)
async def upload_tree(
    file: UploadFile | None = File(default=None, description="Diff output, one record per line"),
    include_renamed: str | None = Form(default=None),
    include_modified: str | None = Form(default=None),
    include_additions: str | None = Form(default=None),
    include_deletions: str | None = Form(default=None),
    include_add_del: str | None = Form(default=None),
    layout: Layout = Form(default="nested"),
) -> TreeResponse:
    validated_file = validate_upload_file(file)
    text = await read_upload_utf8(validated_file)
    config = filter_config_from_form(
        include_renamed, include_modified, include_additions, include_deletions, include_add_del
    )
    return await run_in_threadpool(_build_and_store, text, config, layout)


@router.post("/preview", response_model=PreviewResponse, responses=ERROR_RESPONSES)
def preview_tree(payload: PreviewRequest, layout: Layout = Query(default="nested")) -> PreviewResponse:
    pruned = prune_tree(build_tree_from_text(payload.text), payload.filters.to_config())
    return PreviewResponse(**tree_payload(pruned, layout))


@router.get("/{tree_id}", response_model=TreeResponse, responses=ERROR_RESPONSES)
def get_pruned_tree(
    tree_id: str,
    config: FilterConfig = Depends(filter_config_query),
    layout: Layout = Query(default="nested"),
) -> TreeResponse:
    return _tree_response(tree_id, prune_stored_tree(tree_id, config), layout)


@router.get("/{tree_id}/text", response_class=PlainTextResponse, responses=ERROR_RESPONSES)
def get_tree_text(tree_id: str, config: FilterConfig = Depends(filter_config_query)) -> PlainTextResponse:
    return PlainTextResponse(render_tree_text(prune_stored_tree(tree_id, config)) + "\n")


@router.delete("/{tree_id}", response_model=DeleteTreeResponse, responses=ERROR_RESPONSES)
def delete_tree_endpoint(tree_id: str) -> DeleteTreeResponse:
    delete_tree(tree_id)
    return DeleteTreeResponse(ok=True, id=tree_id)
