import os

from fastapi import UploadFile

from difftree.core.changes import FilterConfig
from difftree.core.errors import APIError


TRUTHY_VALUES = {"1", "true", "yes", "on"}
MAX_UPLOAD_BYTES_DEFAULT = 10 * 1024 * 1024


def parse_boolish(value: str | None, default: bool = True) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUTHY_VALUES


def filter_config_from_form(
    include_renamed: str | None,
    include_modified: str | None,
    include_additions: str | None,
    include_deletions: str | None,
    include_add_del: str | None,
) -> FilterConfig:
    return FilterConfig(
        include_renamed=parse_boolish(include_renamed),
        include_modified=parse_boolish(include_modified),
        include_additions=parse_boolish(include_additions),
        include_deletions=parse_boolish(include_deletions),
        include_add_del=parse_boolish(include_add_del),
    )


def max_upload_bytes() -> int:
    raw = os.getenv("DIFFTREE_MAX_UPLOAD_BYTES", "")
    try:
        value = int(raw)
    except ValueError:
        return MAX_UPLOAD_BYTES_DEFAULT
    return value if value > 0 else MAX_UPLOAD_BYTES_DEFAULT


def validate_upload_file(file: UploadFile | None) -> UploadFile:
    if file is None:
        raise APIError(400, "bad_request", "file is required")
    return file


async def read_upload_utf8(file: UploadFile) -> str:
    limit = max_upload_bytes()
    raw = await file.read(limit + 1)
    if len(raw) > limit:
        raise APIError(413, "payload_too_large", f"file exceeds {limit} bytes")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise APIError(400, "bad_request", "file must decode as UTF-8")
