import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from abendlog.app.core.logging import correlation_id_ctx, event_id_ctx

logger = logging.getLogger(__name__)


def _request_summary(request: Request, status_code: int, started: float) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
    }


class TracingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a correlation id (taken from X-Correlation-ID when
    the frontend sends one) and a fresh event id, so each log line of a user
    action can be grouped. Both ids are echoed in the response headers.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        event_id = str(uuid.uuid4())
        correlation_id_ctx.set(correlation_id)
        event_id_ctx.set(event_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            summary = _request_summary(request, 500, started)
            summary["error"] = str(e)
            logger.error(
                f"{request.method} {request.url.path} failed",
                extra={"extra_data": summary},
                exc_info=True,
            )
            raise

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={"extra_data": _request_summary(request, response.status_code, started)},
        )
        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Event-ID"] = event_id
        return response
