"""
HTTP middleware: request ids and one access log line per API call.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from stockroom.config import get_settings

logger = structlog.get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration and the resolved tenant of each request.

    Static image downloads under the uploads mount are not logged.
    """

    def __init__(self, app, skip_prefixes: tuple = ()):
        super().__init__(app)
        self.skip_prefixes = skip_prefixes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.startswith(self.skip_prefixes):
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Request failed",
                method=request.method,
                path=request.url.path,
                tenant_id=getattr(request.state, "tenant_id", None),
                process_time_ms=_elapsed_ms(started),
            )
            raise

        # get_tenant_id stores the tenant on request.state once the gate passes
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            tenant_id=getattr(request.state, "tenant_id", None),
            process_time_ms=_elapsed_ms(started),
        )
        return response


def setup_middleware(app):
    """Install request logging and correlation ids."""
    settings = get_settings()

    # Starlette runs the last added middleware first, so the correlation id is added last
    app.add_middleware(
        RequestLoggingMiddleware,
        skip_prefixes=(settings.UPLOAD_URL_PREFIX.rstrip("/") + "/",),
    )
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
