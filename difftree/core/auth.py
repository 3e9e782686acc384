from __future__ import annotations

import os
import secrets
from typing import Annotated

from fastapi import Security
from fastapi.security import APIKeyHeader

from difftree.core.errors import APIError


api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def configured_api_keys() -> list[str]:
    """Keys from ``DIFFTREE_API_KEY``; comma-separated to allow rotation."""
    raw = os.getenv("DIFFTREE_API_KEY", "")
    return [key.strip() for key in raw.split(",") if key.strip()]


async def require_api_key(
    x_api_key: Annotated[str | None, Security(api_key_header)],
) -> None:
    keys = configured_api_keys()
    if not keys:
        return
    supplied = x_api_key or ""
    if not any(secrets.compare_digest(supplied.encode(), key.encode()) for key in keys):
        raise APIError(status_code=401, code="unauthorized", message="Invalid API key")
