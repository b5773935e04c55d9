"""
Howl Backend — Request Logging Middleware
===========================================

What:  One access-log line per HTTP request: method, route, status, duration.
Who:   Applied to every request via Starlette middleware, after
       RequestIDMiddleware so the line carries the request ID.

The line names the matched route template (`/businesses/{businessid}`) rather
than the raw path, so lines for the same endpoint group together; the record
id, if any, follows it. Requests no route matched (static files, unknown URLs)
fall back to the raw path.

Example lines:
    2024-01-15T12:00:00 [INFO] howl.access: GET /businesses 200 4.2ms [a1b2c3d4]
    2024-01-15T12:00:01 [WARNING] howl.access: PUT /businesses/{businessid} id=7 400 2.9ms [e5f6a7b8]

What we log vs what we DON'T log:
    ✅ Log: method, route, record id, status, duration, IP, request ID
    ❌ Don't log: request bodies (owner contact details, emails)
"""

import logging
import time
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from howl.middleware.request_id import request_id_var

logger = logging.getLogger("howl.access")

UNLOGGED_PATHS = frozenset({"/health"})


def describe_route(request: Request) -> Tuple[str, Optional[str]]:
    """
    (route template, record id) for a request that has been routed.

    The router stores the matched route and its path params on the scope,
    so this is only meaningful after call_next returns.
    """
    route = request.scope.get("route")
    template = getattr(route, "path", None) or request.url.path
    params = request.scope.get("path_params") or {}
    record_id = next((str(value) for name, value in params.items() if name.endswith("id")), None)
    return template, record_id


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request once the response status is known.

    Level follows the status code: 5xx → ERROR, 4xx → WARNING, else INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        route, record_id = describe_route(request)
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        target = f"{route} id={record_id}" if record_id else route

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s]",
            request.method,
            target,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "record_id": record_id,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
