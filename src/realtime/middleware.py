import time
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

REQUEST_ID_HEADER = "X-Request-ID"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


async def error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        request_id = _request_id(request)
        logger.exception(f"[{request_id}] {request.method} {request.url.path} failed")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "type": type(exc).__name__, "request_id": request_id},
            headers={REQUEST_ID_HEADER: request_id},
        )


async def logging_middleware(request: Request, call_next):
    """Tags each request with an id, echoed back in ``X-Request-ID``."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = round((time.perf_counter() - start) * 1000, 2)
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(f"[{request_id}] {request.method} {request.url.path} [{response.status_code}] {elapsed}ms")
    return response
