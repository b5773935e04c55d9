"""
Howl Backend — Request ID Middleware
======================================

What:  Assigns an ID to each request and returns it in the X-Request-ID header.
Why:   Every log line and error body for one request carries the same ID,
       so a client-reported error can be found in the server log.
How:   A client-sent X-Request-ID is reused when it is a short token
       (letters, digits, `-`, `_`, `.`); anything else is replaced by a fresh
       8-character UUID prefix. The ID goes into a ContextVar and
       request.state.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Echoed into log lines and JSON bodies, so kept to one short token
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: str) -> str:
    """The client's ID if it is a usable token, else a new one."""
    if header_value and _CLIENT_ID_PATTERN.match(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags the request, its log lines and its response with one ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
