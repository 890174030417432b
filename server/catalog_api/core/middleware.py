"""Request correlation and access logging for the catalog API."""

import logging
import re
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .exceptions import InternalServerError
from .observability import metrics_collector

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROBE_PATHS = ("/health", "/ready", "/metrics", "/favicon.ico")

_TRACEPARENT = re.compile(r"^00-([0-9a-f]{32})-([0-9a-f]{16})-([0-9a-f]{2})$")
_RESOURCE = re.compile(r"^/v1/([a-z-]+)")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Echo the caller's X-Request-ID, or mint one, on every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def parse_traceparent(header: Optional[str]) -> Optional[tuple[str, str, str]]:
    """
    Split a W3C ``traceparent`` header into (trace_id, parent_id, flags).

    Returns None for anything but a well-formed version 00 header with
    non-zero ids.
    """
    match = _TRACEPARENT.match(header or "")
    if not match:
        return None
    trace_id, parent_id, flags = match.groups()
    if trace_id == "0" * 32 or parent_id == "0" * 16:
        return None
    return trace_id, parent_id, flags


class TraceContextMiddleware(BaseHTTPMiddleware):
    """Continue the caller's W3C trace, or start one, and return ``traceparent``."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        parsed = parse_traceparent(request.headers.get("traceparent"))
        trace_id, parent_id, flags = parsed or (uuid.uuid4().hex, None, "01")
        span_id = uuid.uuid4().hex[:16]
        tracestate = request.headers.get("tracestate")

        request.state.trace_context = {
            "trace_id": trace_id,
            "span_id": span_id,
            "parent_span_id": parent_id,
        }

        response = await call_next(request)
        response.headers["traceparent"] = f"00-{trace_id}-{span_id}-{flags}"
        if tracestate:
            response.headers["tracestate"] = tracestate
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Log each catalog request once it completes and record it in /metrics.

    Requests are labelled with their route template (``/v1/packages/slug/{slug}``)
    rather than the raw path, and with the catalog resource they address.
    """

    def __init__(self, app: ASGIApp, skip_paths: tuple[str, ...] = PROBE_PATHS):
        super().__init__(app)
        self.skip_paths = skip_paths

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    @staticmethod
    def _route(request: Request) -> str:
        route = request.scope.get("route")
        return getattr(route, "path", None) or "unmatched"

    @staticmethod
    def _resource(path: str) -> str:
        match = _RESOURCE.match(path)
        return match.group(1) if match else "service"

    def _internal_error(self, request_id: str) -> JSONResponse:
        problem = InternalServerError(error_id=request_id)
        return JSONResponse(status_code=problem.status_code, content=problem.problem_details)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        started = time.perf_counter()
        request_id = getattr(request.state, "request_id", "unknown")

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Unhandled error while serving catalog request",
                extra={"request_id": request_id, "method": request.method, "path": path},
                exc_info=True,
            )
            response = self._internal_error(request_id)

        duration = time.perf_counter() - started
        metrics_collector.record_request(request.method, self._route(request), response.status_code, duration)

        if path in self.skip_paths:
            return response

        trace_context = getattr(request.state, "trace_context", {})
        log_data = {
            "request_id": request_id,
            "trace_id": trace_context.get("trace_id", "unknown"),
            "method": request.method,
            "route": self._route(request),
            "resource": self._resource(path),
            "query": request.url.query,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
            "client_ip": self._client_ip(request),
        }

        if response.status_code >= 500:
            logger.error("Catalog request failed", extra=log_data)
        elif response.status_code >= 400:
            logger.warning("Catalog request rejected", extra=log_data)
        else:
            logger.info("Catalog request served", extra=log_data)

        return response


def setup_middleware(app, enable_logging: bool = True) -> None:
    """
    Install the request middleware stack on the app.

    Args:
        app: FastAPI application instance
        enable_logging: Whether to install the access log middleware
    """
    # Last added is first executed
    if enable_logging:
        app.add_middleware(AccessLogMiddleware, skip_paths=PROBE_PATHS)

    app.add_middleware(TraceContextMiddleware)
    app.add_middleware(RequestIDMiddleware)
