import json
import logging
import os
import uuid
from starlette.requests import Request
from starlette.responses import Response

LOGGER_NAME = "difftree"

def setup_logging():
    level = os.getenv("DIFFTREE_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO))

def log_event(msg: str, level: int = logging.INFO, **fields) -> None:
    """Emit one JSON line on the service logger."""
    logging.getLogger(LOGGER_NAME).log(level, json.dumps({"msg": msg, **fields}))

async def inject_request_id(request: Request, call_next):
    req_id = request.headers.get("X-Request-Id", str(uuid.uuid4()))
    request.state.req_id = req_id
    response: Response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    # basic access log
    log_event(
        "request",
        req_id=req_id,
        method=request.method,
        path=request.url.path,
        status=response.status_code,
    )
    return response
