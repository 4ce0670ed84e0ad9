# massage_booking/core/middleware.py
"""Request tracing and logging middleware"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATH_PREFIXES = ("/health",)


async def correlation_id_middleware(request: Request, call_next):
    """Reuse the caller's correlation id or mint one, and echo it back"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log request completion with status and duration"""
    if request.url.path.startswith(QUIET_PATH_PREFIXES):
        return await call_next(request)

    start_time = time.perf_counter()
    response = await call_next(request)
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    logger.info(
        f"[{correlation_id}] {request.method} {request.url.path} "
        f"-> {response.status_code} in {duration_ms}ms",
        extra={
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "client": request.client.host if request.client else "unknown",
        }
    )

    return response
