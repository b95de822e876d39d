import json
import time
from typing import Any, Dict, Optional
from uuid import uuid4

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"
REDACTED_FIELDS = {"password", "token", "access_token"}
_BODY_METHODS = ("POST", "PUT", "PATCH")


def redact_body(body: bytes, content_type: str) -> Optional[Dict[str, Any]]:
    """
    Top-level fields of a JSON object body with secrets masked.

    Anything that is not a JSON object is left out of the logs.
    """
    if not body or "application/json" not in content_type:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return {key: "***" if key.lower() in REDACTED_FIELDS else value for key, value in data.items()}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id and logs its start and outcome.

    The id is taken from an incoming ``X-Request-ID`` header when present,
    bound into structlog's context vars for every log line written while the
    request is handled, and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = {"client_ip": request.client.host if request.client else None}
        if request.query_params:
            started["query_params"] = dict(request.query_params)
        if request.method in _BODY_METHODS:
            body = redact_body(await request.body(), request.headers.get("content-type", ""))
            if body is not None:
                started["body"] = body
        logger.info("Request started", **started)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Request failed", error=str(e), duration=round(time.perf_counter() - start_time, 4))
            raise

        duration = round(time.perf_counter() - start_time, 4)
        log = logger.warning if response.status_code >= 400 else logger.info
        log("Request completed", status_code=response.status_code, duration=duration)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
